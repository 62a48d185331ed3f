"""Boundary Protocols — contracts between the submission pipeline and its collaborators.

Invariants:
    - Services depend on these Protocols, never on concrete clients
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection (FastAPI lifespan)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - RateLimitStore is async: an in-process store and a networked store share one contract
"""

from typing import Protocol

from app.core.errors import ErrorContext


class RateLimitStore(Protocol):
    """Per-key sliding window counter — implemented by shell."""
    async def hit(self, key: str) -> bool: ...


class HumanVerifier(Protocol):
    """Challenge-token verification — raises VerificationFailedError on rejection."""
    async def verify(
        self, token: str, remote_ip: str, context: ErrorContext | None = None,
    ) -> None: ...


class MessageRelay(Protocol):
    """Outbound chat relay — raises RelayFailedError on non-2xx."""
    async def send(
        self, content: str, context: ErrorContext | None = None,
    ) -> None: ...
