"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - Credentials are optional here; the clients validate them at use time

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Defaults provided for all non-secret settings: works out-of-the-box locally
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from app.infrastructure.discord_client import DISCORD_API_BASE
from app.infrastructure.turnstile_client import SITEVERIFY_URL


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # API
    frontend_origin: str = "*"
    contact_path: str = "/api/contact"

    @field_validator("contact_path")
    @classmethod
    def normalize_contact_path(cls, v: str) -> str:
        """Always starts with '/', never ends with one."""
        v = "/" + v.strip().strip("/")
        return v

    # Human verification (Cloudflare Turnstile)
    turnstile_secret: str | None = None
    turnstile_verify_url: str = SITEVERIFY_URL

    # Relay (Discord channel messages)
    discord_bot_token: str | None = None
    discord_channel_id: str | None = None
    discord_api_base: str = DISCORD_API_BASE

    # Outbound HTTP
    outbound_timeout_seconds: float = 5.0

    # Rate limit — 3 requests per caller per 10 s
    rate_limit_max_requests: int = 3
    rate_limit_window_ms: int = 10_000
    rate_limit_max_keys: int = 10_000

    # Submission contract: when True, name and contact are required
    contact_require_identity: bool = False

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
