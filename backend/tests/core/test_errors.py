"""Error Hierarchy — verifies status codes, client messages and envelope shape.

Tests:
    - Every error maps to its stable HTTP status and client message
    - to_response() exposes only {ok, error} (no context, no debug info)
    - to_log_extra() surfaces code, status and caller id
"""

import pytest

from app.core.errors import (
    ContactRelayError,
    EmptyMessageError,
    ErrorContext,
    InvalidContentTypeError,
    MalformedJsonError,
    MethodNotAllowedError,
    MissingFieldsError,
    RateLimitedError,
    RelayFailedError,
    ServerError,
    ServerMisconfiguredError,
    VerificationFailedError,
)


@pytest.mark.parametrize("error, status, message", [
    (InvalidContentTypeError(), 400, "Invalid content type"),
    (MalformedJsonError(), 400, "Invalid JSON"),
    (MissingFieldsError(["message"]), 400, "Missing fields"),
    (EmptyMessageError(), 400, "Empty message"),
    (VerificationFailedError(), 403, "Bot detected"),
    (MethodNotAllowedError("GET"), 405, "Method not allowed"),
    (RateLimitedError(), 429, "Too many requests"),
    (ServerMisconfiguredError(["DISCORD_BOT_TOKEN"]), 500, "Server misconfig"),
    (ServerError(), 500, "Server error"),
    (RelayFailedError(503), 502, "Discord error"),
])
def test_status_and_message(error, status, message):
    assert isinstance(error, ContactRelayError)
    assert error.http_status == status
    assert error.to_response() == {"ok": False, "error": message}


def test_response_never_includes_debug_info():
    ctx = ErrorContext(caller_id="203.0.113.5", debug_info={"body": "secret detail"})
    body = RelayFailedError(500, ctx).to_response()
    assert "secret detail" not in str(body)
    assert "203.0.113.5" not in str(body)


def test_log_extra_fields():
    err = RateLimitedError(ErrorContext(caller_id="198.51.100.7"))
    assert err.to_log_extra() == {
        "error_code": "RATE_LIMITED",
        "status_code": 429,
        "caller_id": "198.51.100.7",
    }


def test_missing_fields_records_field_names():
    assert MissingFieldsError(["turnstileToken"]).fields == ["turnstileToken"]
