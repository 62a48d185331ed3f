"""Error Handlers — global exception handlers for the contact relay API.

Invariants:
    - ContactRelayError → {ok: false, error: <stable message>} with its HTTP status
    - Framework HTTPException (unmatched route or method) → same envelope
    - Exception (catch-all) → 500 "Server error", never leaks internal details
    - Every error response carries the CORS envelope

Design Decisions:
    - Three-layer handler: domain (ContactRelayError), framework (HTTPException),
      catch-all (Exception)
    - Extracted from main.py (ADR: import fan-out < 10)
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.cors import apply_cors
from app.config import get_settings
from app.core.errors import ContactRelayError, MethodNotAllowedError, ServerError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_contact_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def error_response(exc: ContactRelayError) -> JSONResponse:
    """Build the CORS-wrapped JSON response for a domain error."""
    response = JSONResponse(status_code=exc.http_status, content=exc.to_response())
    return apply_cors(response, get_settings().frontend_origin)


def _register_contact_error_handler(app: FastAPI) -> None:
    """Register contact relay domain/infrastructure error handler."""

    @app.exception_handler(ContactRelayError)
    async def contact_error_handler(request: Request, exc: ContactRelayError):
        """Handle all contact relay errors."""
        logger.log(
            logging.ERROR if exc.http_status >= 500 else logging.INFO,
            f"ContactRelayError: {exc.code}",
            extra={**exc.to_log_extra(), "path": request.url.path},
        )
        return error_response(exc)


def _register_http_error_handler(app: FastAPI) -> None:
    """Register handler for routing errors raised by Starlette."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 405:
            return error_response(MethodNotAllowedError(request.method))
        response = JSONResponse(
            status_code=exc.status_code,
            content={"ok": False, "error": str(exc.detail or "HTTP error")},
            headers=getattr(exc, "headers", None),
        )
        return apply_cors(response, get_settings().frontend_origin)


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return error_response(ServerError())
