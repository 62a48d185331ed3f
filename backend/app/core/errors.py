"""Error Hierarchy — typed, categorized exceptions for every contact relay failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error maps to one stable HTTP status and one stable client message
    - to_response() produces the client envelope {ok: false, error: <message>} only
    - Diagnostic detail lives in ErrorContext.debug_info and is logged, never returned

Design Decisions:
    - Single hierarchy with ContactRelayError base: global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    THROTTLED = "throttled"
    VERIFICATION = "verification"
    CONFIGURATION = "configuration"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    caller_id: str | None = None
    debug_info: dict[str, Any] | None = None


class ContactRelayError(Exception):
    """Base exception for all contact relay errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the client-facing error body."""
        return {"ok": False, "error": self.message}

    def to_log_extra(self) -> dict:
        """Fields surfaced by the JSON log formatter."""
        return {
            "error_code": self.code,
            "status_code": self.http_status,
            "caller_id": self.context.caller_id,
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class InvalidContentTypeError(ContactRelayError):
    """Request content type is not JSON."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid content type", "INVALID_CONTENT_TYPE",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, context, 400,
        )


class MalformedJsonError(ContactRelayError):
    """Request body could not be decoded as JSON."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid JSON", "MALFORMED_JSON",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, context, 400,
        )


class MissingFieldsError(ContactRelayError):
    """Required submission fields are absent or not strings."""
    def __init__(self, fields: list[str] | None = None, context: ErrorContext | None = None):
        super().__init__(
            "Missing fields", "MISSING_FIELDS",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, context, 400,
        )
        self.fields = fields or []


class EmptyMessageError(ContactRelayError):
    """Message is empty once sanitized."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Empty message", "EMPTY_MESSAGE",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, context, 400,
        )


class VerificationFailedError(ContactRelayError):
    """Human-verification service rejected the token."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Bot detected", "VERIFICATION_FAILED",
            ErrorCategory.VERIFICATION, ErrorSeverity.WARNING, context, 403,
        )


class MethodNotAllowedError(ContactRelayError):
    """Contact endpoint only accepts POST (and OPTIONS preflight)."""
    def __init__(self, method: str = "", context: ErrorContext | None = None):
        super().__init__(
            "Method not allowed", "METHOD_NOT_ALLOWED",
            ErrorCategory.VALIDATION, ErrorSeverity.INFO, context, 405,
        )
        self.method = method


class RateLimitedError(ContactRelayError):
    """Caller exceeded the per-window request budget."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Too many requests", "RATE_LIMITED",
            ErrorCategory.THROTTLED, ErrorSeverity.WARNING, context, 429,
        )


# ─── Server Errors (500-level) ──────────────────────────────────

class ServerMisconfiguredError(ContactRelayError):
    """A credential or destination needed for an outbound call is not configured."""
    def __init__(self, missing: list[str], context: ErrorContext | None = None):
        super().__init__(
            "Server misconfig", "SERVER_MISCONFIGURED",
            ErrorCategory.CONFIGURATION, ErrorSeverity.CRITICAL, context, 500,
        )
        self.missing = missing


class ServerError(ContactRelayError):
    """Unexpected failure, including verification transport errors."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Server error", "INTERNAL_ERROR",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL, context, 500,
        )


class RelayFailedError(ContactRelayError):
    """Chat relay returned a non-2xx status or could not be reached."""
    def __init__(self, status_code: int | None = None, context: ErrorContext | None = None):
        super().__init__(
            "Discord error", "RELAY_FAILED",
            ErrorCategory.EXTERNAL_API, ErrorSeverity.ERROR, context, 502,
        )
        self.status_code = status_code
