"""Root conftest — shared test configuration."""

import os

# Ensure tests never talk to real Turnstile/Discord credentials
os.environ.setdefault("FRONTEND_ORIGIN", "https://frontend.test")
os.environ.setdefault("TURNSTILE_SECRET", "turnstile-test-secret")
os.environ.setdefault("DISCORD_BOT_TOKEN", "discord-test-token")
os.environ.setdefault("DISCORD_CHANNEL_ID", "123456789")
os.environ.setdefault("LOG_FORMAT", "text")
