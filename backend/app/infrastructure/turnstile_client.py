"""Turnstile Client — verifies human-challenge tokens against Cloudflare siteverify.

Invariants:
    - Exactly one attempt per call, bounded by the shared client's timeout
    - Missing secret → ServerMisconfiguredError before any network call
    - success != true → VerificationFailedError (error codes logged, not returned)
    - Transport failure, timeout, or undecodable body → ServerError

Design Decisions:
    - Form-encoded POST {secret, response, remoteip}: the siteverify wire format
    - No retry: a consumed Turnstile token cannot be verified twice
"""

import logging

import httpx

from app.core.errors import (
    ErrorContext, ServerError, ServerMisconfiguredError, VerificationFailedError,
)

logger = logging.getLogger(__name__)

SITEVERIFY_URL = "https://challenges.cloudflare.com/turnstile/v0/siteverify"


class TurnstileClient:
    """Wraps the siteverify call with error mapping."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        secret: str | None,
        verify_url: str = SITEVERIFY_URL,
    ):
        self.http = http
        self.secret = secret
        self.verify_url = verify_url

    async def verify(
        self, token: str, remote_ip: str, context: ErrorContext | None = None,
    ) -> None:
        """Raise unless the verification service reports success for `token`."""
        if not self.secret:
            logger.error("Missing Turnstile secret", extra={"error_code": "SERVER_MISCONFIGURED"})
            raise ServerMisconfiguredError(["TURNSTILE_SECRET"], context)

        data = await self._post(token, remote_ip, context)
        if data.get("success") is not True:
            logger.warning(
                f"Turnstile rejected token: {data.get('error-codes', [])}",
                extra={"caller_id": remote_ip},
            )
            raise VerificationFailedError(context)

    async def _post(
        self, token: str, remote_ip: str, context: ErrorContext | None,
    ) -> dict:
        try:
            res = await self.http.post(
                self.verify_url,
                data={"secret": self.secret, "response": token, "remoteip": remote_ip},
            )
            data = res.json()
        except httpx.TimeoutException as e:
            logger.error(f"Turnstile verification timeout: {e}")
            raise ServerError(context)
        except httpx.HTTPError as e:
            logger.error(f"Turnstile transport error: {e}")
            raise ServerError(context)
        except ValueError as e:
            logger.error(f"Turnstile returned undecodable body: {e}")
            raise ServerError(context)
        if not isinstance(data, dict):
            logger.error(f"Turnstile returned unexpected payload type: {type(data).__name__}")
            raise ServerError(context)
        return data
