"""Sliding Window — pure admission decision over a per-caller timestamp log.

Invariants:
    - prune_window keeps only timestamps t with now - t < window_ms, order preserved
    - evaluate_window is PURE: returns the history to store back, never mutates input
    - A rejected request is NOT appended to the stored history
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class WindowDecision:
    """Outcome of one admission check."""
    allowed: bool
    history: list[float]


def prune_window(history: list[float], now: float, window_ms: float) -> list[float]:
    return [t for t in history if now - t < window_ms]


def evaluate_window(
    history: list[float], now: float, window_ms: float, max_requests: int,
) -> WindowDecision:
    """Filter history to the trailing window and decide whether `now` is admitted."""
    recent = prune_window(history, now, window_ms)
    if len(recent) >= max_requests:
        return WindowDecision(allowed=False, history=recent)
    recent.append(now)
    return WindowDecision(allowed=True, history=recent)
