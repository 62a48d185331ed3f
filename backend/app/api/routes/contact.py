"""Contact Route — POST submission, OPTIONS preflight, 405 for everything else.

Invariants:
    - Mounted at settings.contact_path (default /api/contact) by main.py
    - Success → 200 {ok: true}; failures raised as ContactRelayError and
      rendered by api/error_handlers.py
    - Every response carries the CORS envelope (api/cors.py)

Design Decisions:
    - Raw Request body instead of a Pydantic body parameter: content type and
      rate limit are checked before the body is decoded
    - Non-POST methods routed explicitly so the 405 body matches the error envelope
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from app.api.cors import apply_cors
from app.api.dependencies import get_contact_handler
from app.config import get_settings
from app.core.errors import MethodNotAllowedError
from app.schemas.contact import ContactResponse
from app.services.contact_submission import ContactSubmissionHandler

logger = logging.getLogger(__name__)
router = APIRouter(tags=["contact"])


@router.post("", response_model=ContactResponse)
async def submit_contact(
    request: Request,
    handler: ContactSubmissionHandler = Depends(get_contact_handler),
):
    """Relay a contact-form submission to the team channel."""
    result = await handler.handle(
        body=await request.body(),
        content_type=request.headers.get("content-type"),
        forwarded_for=request.headers.get("x-forwarded-for"),
        user_agent=request.headers.get("user-agent"),
    )
    return apply_cors(JSONResponse(result), get_settings().frontend_origin)


@router.options("", status_code=status.HTTP_204_NO_CONTENT)
async def contact_preflight():
    """CORS preflight — empty body."""
    return apply_cors(
        Response(status_code=status.HTTP_204_NO_CONTENT),
        get_settings().frontend_origin,
    )


@router.api_route(
    "", methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False,
)
async def contact_method_not_allowed(request: Request):
    raise MethodNotAllowedError(request.method)
