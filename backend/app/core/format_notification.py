"""Notification Formatting — composes the chat message relayed for a submission.

Invariants:
    - Input fields are already sanitized (core/sanitize.py)
    - Name/contact lines only appear when the field is present
    - User agent is sanitized and capped at USER_AGENT_MAX_CHARS
"""

from dataclasses import dataclass

from app.core.client_identity import UNKNOWN_USER_AGENT
from app.core.sanitize import clean_text


USER_AGENT_MAX_CHARS: int = 200


@dataclass(frozen=True)
class SanitizedSubmission:
    """A submission after sanitization, ready for relay."""
    message: str
    caller_id: str
    user_agent: str
    name: str | None = None
    contact: str | None = None


def format_notification(submission: SanitizedSubmission) -> str:
    """Render the Discord message content for a sanitized submission."""
    lines = ["📩 **New Contact Message**", ""]
    if submission.name:
        lines.append(f"👤 **Name:** {submission.name}")
    if submission.contact:
        lines.append(f"🔗 **Contact:** {submission.contact}")
    lines.append("💬 **Message:**")
    lines.append(submission.message)
    lines.append("")
    lines.append(f"🌐 **IP:** {submission.caller_id}")
    ua = clean_text(submission.user_agent, USER_AGENT_MAX_CHARS) or UNKNOWN_USER_AGENT
    lines.append(f"🖥️ **UA:** {ua}")
    return "\n".join(lines)
