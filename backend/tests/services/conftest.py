"""Service test fixtures — fake collaborators + FastAPI test client.

Invariants:
    - Every test gets a fresh rate limiter driven by a FakeClock
    - get_contact_handler dependency overridden to use the fakes
    - No test performs real network IO

Design Decisions:
    - Override the handler dependency instead of running the lifespan: ASGITransport
      does not trigger lifespan events, and fakes keep assertions on call order simple
    - The real lifespan and dependency wiring are covered in test_app_wiring.py
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.dependencies import get_contact_handler
from app.infrastructure.rate_limiter import SlidingWindowRateLimiter
from app.main import app
from app.services.contact_submission import ContactSubmissionHandler

from tests.services.mock_collaborators import FakeClock, FakeRelay, FakeVerifier


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limiter(clock):
    return SlidingWindowRateLimiter(max_requests=3, window_ms=10_000, clock=clock)


@pytest.fixture
def verifier():
    return FakeVerifier()


@pytest.fixture
def relay():
    return FakeRelay()


@pytest.fixture
def handler(limiter, verifier, relay):
    return ContactSubmissionHandler(limiter, verifier, relay)


@pytest.fixture
async def client(handler):
    """FastAPI test client with the contact handler overridden."""
    app.dependency_overrides[get_contact_handler] = lambda: handler

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def valid_payload():
    return {
        "name": "Ada",
        "contact": "ada@example.com",
        "message": "Hello there",
        "turnstileToken": "tok-123",
    }
