"""Discord Relay Client — channel message request shape and failure mapping.

Invariants:
    - POST {api_base}/channels/{id}/messages with "Bot <token>" auth and {content}
    - Missing token or channel → ServerMisconfiguredError, no request sent
    - Non-2xx → RelayFailedError without Discord's body in the client message
    - Transport errors and timeouts → RelayFailedError
"""

import json

import httpx
import pytest

from app.core.errors import RelayFailedError, ServerMisconfiguredError
from app.infrastructure.discord_client import DiscordRelayClient


def _http(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


async def test_posts_content_with_bot_auth():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": "1"})

    async with _http(handler) as http:
        await DiscordRelayClient(http, "bot-token", "42").send("hello")

    request = seen[0]
    assert str(request.url) == "https://discord.com/api/v10/channels/42/messages"
    assert request.headers["authorization"] == "Bot bot-token"
    assert request.headers["content-type"] == "application/json"
    assert json.loads(request.content) == {"content": "hello"}


async def test_non_2xx_raises_relay_failed_without_detail():
    def handler(request):
        return httpx.Response(403, json={"message": "Missing Access", "code": 50001})

    async with _http(handler) as http:
        with pytest.raises(RelayFailedError) as exc_info:
            await DiscordRelayClient(http, "bot-token", "42").send("hello")

    err = exc_info.value
    assert err.http_status == 502
    assert err.status_code == 403
    assert "Missing Access" not in json.dumps(err.to_response())


@pytest.mark.parametrize("token, channel, missing", [
    (None, "42", ["DISCORD_BOT_TOKEN"]),
    ("bot-token", None, ["DISCORD_CHANNEL_ID"]),
    ("", "", ["DISCORD_BOT_TOKEN", "DISCORD_CHANNEL_ID"]),
])
async def test_missing_config_fails_fast(token, channel, missing):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200)

    async with _http(handler) as http:
        with pytest.raises(ServerMisconfiguredError) as exc_info:
            await DiscordRelayClient(http, token, channel).send("hello")

    assert exc_info.value.missing == missing
    assert seen == []


async def test_transport_error_maps_to_relay_failed():
    def handler(request):
        raise httpx.ConnectError("dns failure", request=request)

    async with _http(handler) as http:
        with pytest.raises(RelayFailedError):
            await DiscordRelayClient(http, "bot-token", "42").send("hello")


async def test_timeout_maps_to_relay_failed():
    def handler(request):
        raise httpx.WriteTimeout("stalled", request=request)

    async with _http(handler) as http:
        with pytest.raises(RelayFailedError):
            await DiscordRelayClient(http, "bot-token", "42").send("hello")


async def test_api_base_trailing_slash_trimmed():
    client = DiscordRelayClient(None, "t", "7", "https://discord.test/api/")
    assert client.messages_url == "https://discord.test/api/channels/7/messages"
