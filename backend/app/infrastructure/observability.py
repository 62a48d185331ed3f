"""Structured Logging — JSON formatter and setup for production observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (caller_id, error_code, status_code, path) surfaced when present
    - JSON format in production, human-readable in development
    - Secrets (bot token, Turnstile secret) are never passed to a logger

Design Decisions:
    - setup_logging runs on every lifespan start; it replaces its own named root
      handler so repeated startups (tests, reloads) never duplicate log lines
    - Handlers installed by others (pytest caplog, uvicorn) are left alone
"""

import logging
import json
from datetime import datetime, timezone

HANDLER_NAME = "contact_relay"
EXTRA_FIELDS = ("caller_id", "error_code", "status_code", "path", "method")


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Install the application handler on the root logger, replacing a previous one."""
    for existing in list(logging.root.handlers):
        if existing.get_name() == HANDLER_NAME:
            logging.root.removeHandler(existing)
    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s — %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
