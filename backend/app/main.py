"""Contact Relay API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ContactRelayError → {ok: false, error} responses
    - Rate limiter and outbound clients constructed once in the lifespan and
      stored on app.state; the shared httpx client is closed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - CORS applied per response (api/cors.py), not via CORSMiddleware, so error
      paths carry the same headers as success
    - redirect_slashes off: a trailing-slash path gets the 404 envelope, not a bare 307
"""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from app.api.error_handlers import register_error_handlers
from app.api.routes import contact, health
from app.config import get_settings
from app.infrastructure.discord_client import DiscordRelayClient
from app.infrastructure.observability import setup_logging
from app.infrastructure.rate_limiter import SlidingWindowRateLimiter
from app.infrastructure.turnstile_client import TurnstileClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    http = httpx.AsyncClient(timeout=settings.outbound_timeout_seconds)
    app.state.rate_limiter = SlidingWindowRateLimiter(
        max_requests=settings.rate_limit_max_requests,
        window_ms=settings.rate_limit_window_ms,
        max_keys=settings.rate_limit_max_keys,
    )
    app.state.verifier = TurnstileClient(
        http, settings.turnstile_secret, settings.turnstile_verify_url,
    )
    app.state.relay = DiscordRelayClient(
        http, settings.discord_bot_token, settings.discord_channel_id,
        settings.discord_api_base,
    )
    logger.info("Contact relay API started")
    yield
    await http.aclose()
    logger.info("Contact relay API shutting down")


app = FastAPI(
    title="Contact Relay API", version=health.SERVICE_VERSION, lifespan=lifespan,
    redirect_slashes=False,
)

# Routes — explicit registration
settings = get_settings()
app.include_router(health.router)
app.include_router(contact.router, prefix=settings.contact_path)

register_error_handlers(app)
