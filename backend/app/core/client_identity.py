"""Caller Identity — derives the rate-limit key from proxy headers.

Invariants:
    - Identifier is the first comma-separated token of X-Forwarded-For, trimmed
    - Absent or blank header yields UNKNOWN_CALLER ("0.0.0.0")
"""

UNKNOWN_CALLER = "0.0.0.0"
UNKNOWN_USER_AGENT = "unknown"


def caller_id_from_forwarded(forwarded_for: str | None) -> str:
    """Return the originating address from an X-Forwarded-For value."""
    if not forwarded_for:
        return UNKNOWN_CALLER
    first = forwarded_for.split(",")[0].strip()
    return first or UNKNOWN_CALLER


def user_agent_or_default(user_agent: str | None) -> str:
    return user_agent or UNKNOWN_USER_AGENT
