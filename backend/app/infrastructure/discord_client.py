"""Discord Relay Client — posts contact notifications to a channel as a bot.

Invariants:
    - Missing bot token or channel id → ServerMisconfiguredError, no call attempted
    - Config checked at send time (late), not at startup
    - Non-2xx, transport failure, or timeout → RelayFailedError
    - Discord's error body is logged only, never attached to the raised error message

Design Decisions:
    - Channel message API with "Bot <token>" auth over an incoming webhook:
      one bot can serve several channels selected by configuration
"""

import logging

import httpx

from app.core.errors import ErrorContext, RelayFailedError, ServerMisconfiguredError

logger = logging.getLogger(__name__)

DISCORD_API_BASE = "https://discord.com/api/v10"


class DiscordRelayClient:
    """Sends plain-text channel messages through the Discord REST API."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        bot_token: str | None,
        channel_id: str | None,
        api_base: str = DISCORD_API_BASE,
    ):
        self.http = http
        self.bot_token = bot_token
        self.channel_id = channel_id
        self.api_base = api_base.rstrip("/")

    @property
    def messages_url(self) -> str:
        return f"{self.api_base}/channels/{self.channel_id}/messages"

    async def send(self, content: str, context: ErrorContext | None = None) -> None:
        """POST `content` to the configured channel."""
        self._require_config(context)
        try:
            res = await self.http.post(
                self.messages_url,
                headers={"Authorization": f"Bot {self.bot_token}"},
                json={"content": content},
            )
        except httpx.TimeoutException as e:
            logger.error(f"Discord relay timeout: {e}")
            raise RelayFailedError(context=context)
        except httpx.HTTPError as e:
            logger.error(f"Discord transport error: {e}")
            raise RelayFailedError(context=context)

        if not res.is_success:
            logger.error(
                f"Discord relay failed ({res.status_code}): {res.text}",
                extra={"status_code": res.status_code},
            )
            raise RelayFailedError(res.status_code, context)

    def _require_config(self, context: ErrorContext | None) -> None:
        missing = []
        if not self.bot_token:
            missing.append("DISCORD_BOT_TOKEN")
        if not self.channel_id:
            missing.append("DISCORD_CHANNEL_ID")
        if missing:
            logger.error(
                f"Missing Discord configs: {', '.join(missing)}",
                extra={"error_code": "SERVER_MISCONFIGURED"},
            )
            raise ServerMisconfiguredError(missing, context)
