"""Contact Submission Handler — gate, throttle, parse, sanitize, verify, relay.

Invariants:
    - Stages run in a fixed order; the first failure ends the request
    - No outbound call fires before content type, rate limit, body and
      sanitization checks have all passed
    - Relay is attempted only after verification succeeds
    - Every failure leaves as a ContactRelayError; unexpected exceptions are
      logged with traceback and converted to ServerError

Design Decisions:
    - Explicit two-stage outbound pipeline (verify, then relay): relay depends on
      verification, so the calls are never concurrent
    - Handler is constructed per request from lifespan-owned collaborators
      (api/dependencies.py), so tests inject fakes without patching modules
"""

import json
import logging

from pydantic import ValidationError

from app.core.client_identity import caller_id_from_forwarded, user_agent_or_default
from app.core.errors import (
    ContactRelayError,
    ErrorContext,
    InvalidContentTypeError,
    MalformedJsonError,
    MissingFieldsError,
    RateLimitedError,
    ServerError,
)
from app.core.format_notification import SanitizedSubmission, format_notification
from app.core.repository_protocols import HumanVerifier, MessageRelay, RateLimitStore
from app.core.sanitize import clean_text, require_message
from app.schemas.contact import ContactSubmission

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


def check_content_type(content_type: str | None, context: ErrorContext | None = None) -> None:
    if JSON_CONTENT_TYPE not in (content_type or "").lower():
        raise InvalidContentTypeError(context)


def parse_submission(
    body: bytes,
    require_identity: bool = False,
    context: ErrorContext | None = None,
) -> ContactSubmission:
    """Decode and validate the request body. Parser details are logged, never raised."""
    try:
        data = json.loads(body)
    except (ValueError, RecursionError) as e:
        logger.info(f"Rejected malformed JSON body: {type(e).__name__}")
        raise MalformedJsonError(context)

    if not isinstance(data, dict):
        raise MissingFieldsError(["message", "turnstileToken"], context)

    try:
        submission = ContactSubmission.model_validate(data)
    except ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        raise MissingFieldsError(fields, context)

    if require_identity:
        missing = submission.missing_identity()
        if missing:
            raise MissingFieldsError(missing, context)
    return submission


def sanitize_submission(
    submission: ContactSubmission,
    caller_id: str,
    user_agent: str,
    context: ErrorContext | None = None,
) -> SanitizedSubmission:
    """Apply the sanitizer to every free-text field. Raises EmptyMessageError."""
    return SanitizedSubmission(
        message=require_message(submission.message, context),
        caller_id=caller_id,
        user_agent=user_agent,
        name=clean_text(submission.name) if submission.name is not None else None,
        contact=clean_text(submission.contact) if submission.contact is not None else None,
    )


class ContactSubmissionHandler:
    """Runs one contact submission through the full pipeline."""

    def __init__(
        self,
        limiter: RateLimitStore,
        verifier: HumanVerifier,
        relay: MessageRelay,
        require_identity: bool = False,
    ):
        self.limiter = limiter
        self.verifier = verifier
        self.relay = relay
        self.require_identity = require_identity

    async def handle(
        self,
        *,
        body: bytes,
        content_type: str | None,
        forwarded_for: str | None = None,
        user_agent: str | None = None,
    ) -> dict:
        """Process a POST. Returns {"ok": True} or raises ContactRelayError."""
        caller_id = caller_id_from_forwarded(forwarded_for)
        context = ErrorContext(caller_id=caller_id)
        try:
            return await self._run(
                body, content_type, caller_id,
                user_agent_or_default(user_agent), context,
            )
        except ContactRelayError:
            raise
        except Exception as e:
            logger.error(
                f"Unhandled error processing contact submission: {e}",
                exc_info=True, extra={"caller_id": caller_id},
            )
            raise ServerError(context)

    async def _run(
        self,
        body: bytes,
        content_type: str | None,
        caller_id: str,
        user_agent: str,
        context: ErrorContext,
    ) -> dict:
        check_content_type(content_type, context)

        if not await self.limiter.hit(caller_id):
            logger.warning("Rate limit exceeded", extra={"caller_id": caller_id})
            raise RateLimitedError(context)

        submission = parse_submission(body, self.require_identity, context)
        sanitized = sanitize_submission(submission, caller_id, user_agent, context)

        # Stage 1: human verification. Stage 2 runs only if this returns.
        await self.verifier.verify(submission.turnstile_token, caller_id, context)
        await self.relay.send(format_notification(sanitized), context)

        logger.info("Contact submission relayed", extra={"caller_id": caller_id})
        return {"ok": True}
