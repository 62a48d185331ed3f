"""In-Memory Rate Limiter — bounded per-caller sliding window store.

Invariants:
    - At most max_requests admitted per key within window_ms
    - Read-modify-write of a key's history happens under one asyncio.Lock
    - Rejected requests are not recorded (core/rate_window.py decides)
    - len(store) <= max_keys after every hit()

Design Decisions:
    - Constructed once in the FastAPI lifespan and injected: no module-level state,
      replaceable by any RateLimitStore implementation
    - Capacity enforced lazily on insert, from the least-recently-touched end only
      (dict insertion order, refreshed on hit): stale keys at the head are swept,
      then active head keys evicted until under capacity. Each key is removed at
      most once, so a flood of new keys costs amortized O(1) per hit under the lock
    - No reset: state lives until process restart
    - Clock injectable for tests; default is monotonic milliseconds
"""

import asyncio
import logging
import time
from collections.abc import Callable

from app.core.rate_window import evaluate_window, prune_window

logger = logging.getLogger(__name__)


def monotonic_ms() -> float:
    return time.monotonic() * 1000


class SlidingWindowRateLimiter:
    """Per-key sliding window counter with bounded total memory."""

    def __init__(
        self,
        max_requests: int = 3,
        window_ms: int = 10_000,
        max_keys: int = 10_000,
        clock: Callable[[], float] = monotonic_ms,
    ):
        self.max_requests = max_requests
        self.window_ms = window_ms
        self.max_keys = max_keys
        self._clock = clock
        self._history: dict[str, list[float]] = {}
        self._lock = asyncio.Lock()

    async def hit(self, key: str) -> bool:
        """Record a request for `key`. Returns False if the caller is over budget."""
        async with self._lock:
            now = self._clock()
            decision = evaluate_window(
                self._history.pop(key, []), now,
                self.window_ms, self.max_requests,
            )
            self._history[key] = decision.history
            if len(self._history) > self.max_keys:
                self._enforce_capacity(now)
            return decision.allowed

    def history(self, key: str) -> list[float]:
        """Stored timestamps for `key` (copy). Exposed for diagnostics and tests."""
        return list(self._history.get(key, []))

    def __len__(self) -> int:
        return len(self._history)

    def _enforce_capacity(self, now: float) -> None:
        """Drop stale head keys, then evict head keys until under capacity."""
        swept = evicted = 0
        while self._history:
            oldest = next(iter(self._history))
            if prune_window(self._history[oldest], now, self.window_ms):
                if len(self._history) <= self.max_keys:
                    break
                evicted += 1
            else:
                swept += 1
            del self._history[oldest]
        if swept or evicted:
            logger.info(
                f"Rate limiter pruned {swept} stale and evicted {evicted} active keys",
            )
