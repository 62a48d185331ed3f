"""Text Sanitization — strips tag-like markup and caps free-text submission fields.

Invariants:
    - clean_text is PURE: trim, strip every <...> match, then cap
    - Output never contains a substring matching TAG_PATTERN
    - Tag matching is non-greedy and not nesting-aware: "<a<b>>x" -> ">x",
      a lone "<" with no closing ">" is kept
    - <script>/<style> blocks are dropped with their contents before tag stripping
    - MESSAGE_MAX_CHARS (500) is single source of truth for the cap

Design Decisions:
    - Regex strip over an HTML parser: relay target renders plain text, not HTML
    - Message truncation is visible (marker appended); identity fields are capped silently
"""

import re

from app.core.errors import EmptyMessageError, ErrorContext


TAG_PATTERN = re.compile(r"<[^>]*>")
SCRIPT_BLOCK_PATTERN = re.compile(
    r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL,
)
MESSAGE_MAX_CHARS: int = 500
TRUNCATION_MARKER = " ...[truncated]"


def strip_tags(value: str) -> str:
    """Remove script/style blocks, then every remaining tag-like substring."""
    return TAG_PATTERN.sub("", SCRIPT_BLOCK_PATTERN.sub("", value))


def clean_text(value: str, limit: int = MESSAGE_MAX_CHARS) -> str:
    """Trim, strip tags, and silently cap at `limit` characters."""
    return strip_tags(value.strip())[:limit]


def clean_message(value: str, limit: int = MESSAGE_MAX_CHARS) -> str:
    """Sanitize the message body; appends TRUNCATION_MARKER when capped."""
    stripped = strip_tags(value.strip())
    if len(stripped) > limit:
        return stripped[:limit] + TRUNCATION_MARKER
    return stripped


def require_message(value: str, context: ErrorContext | None = None) -> str:
    """Sanitize the message and raise EmptyMessageError if only whitespace remains."""
    cleaned = clean_message(value)
    if not cleaned.strip():
        raise EmptyMessageError(context)
    return cleaned
