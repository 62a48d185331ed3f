"""Structured Logging — JSON formatter surfaces extra fields and exceptions."""

import json
import logging
import sys

import pytest

from app.infrastructure.observability import HANDLER_NAME, JSONFormatter, setup_logging


def _record(msg="hello", exc_info=None, **extra):
    record = logging.LogRecord("app.test", logging.WARNING, __file__, 1, msg, None, exc_info)
    record.__dict__.update(extra)
    return record


def test_base_fields():
    out = json.loads(JSONFormatter().format(_record()))
    assert out["level"] == "WARNING"
    assert out["logger"] == "app.test"
    assert out["message"] == "hello"
    assert "timestamp" in out


def test_extra_fields_surfaced_when_present():
    out = json.loads(JSONFormatter().format(
        _record(caller_id="203.0.113.5", error_code="RATE_LIMITED", status_code=429),
    ))
    assert out["caller_id"] == "203.0.113.5"
    assert out["error_code"] == "RATE_LIMITED"
    assert out["status_code"] == 429
    assert "path" not in out


def test_exception_included():
    try:
        raise ValueError("bad")
    except ValueError:
        out = json.loads(JSONFormatter().format(_record(exc_info=sys.exc_info())))
    assert "ValueError: bad" in out["exception"]


@pytest.fixture
def restore_root_logger():
    handlers, level = list(logging.root.handlers), logging.root.level
    yield
    logging.root.handlers[:] = handlers
    logging.root.setLevel(level)


def _app_handlers():
    return [h for h in logging.root.handlers if h.get_name() == HANDLER_NAME]


def test_setup_logging_twice_installs_one_handler(restore_root_logger):
    setup_logging("INFO", "text")
    setup_logging("DEBUG", "json")
    handlers = _app_handlers()
    assert len(handlers) == 1
    assert isinstance(handlers[0].formatter, JSONFormatter)
    assert logging.root.level == logging.DEBUG


def test_setup_logging_keeps_foreign_handlers(restore_root_logger):
    foreign = logging.NullHandler()
    logging.root.addHandler(foreign)
    setup_logging()
    setup_logging()
    assert foreign in logging.root.handlers
    assert len(_app_handlers()) == 1
