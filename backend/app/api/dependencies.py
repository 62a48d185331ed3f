"""Request Dependencies — hand lifespan-owned collaborators to route handlers.

Invariants:
    - Collaborators live on app.state, created once by the lifespan
    - Tests replace get_contact_handler via app.dependency_overrides
"""

from fastapi import Depends, Request

from app.config import Settings, get_settings
from app.services.contact_submission import ContactSubmissionHandler


def get_contact_handler(
    request: Request, settings: Settings = Depends(get_settings),
) -> ContactSubmissionHandler:
    state = request.app.state
    return ContactSubmissionHandler(
        limiter=state.rate_limiter,
        verifier=state.verifier,
        relay=state.relay,
        require_identity=settings.contact_require_identity,
    )
