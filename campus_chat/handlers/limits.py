"""Per-user sliding-window limiter for chat sends."""

from __future__ import annotations

import time
import collections
from collections.abc import Callable

from campus_chat.errors import RateLimitError

TimeFn = Callable[[], float]


class SlidingWindowRateLimiter:
    """Track sends per key over a rolling time window.

    Keyed by user so that opening several sockets does not multiply the
    allowance. Disabled if limit <= 0 or window_seconds <= 0.
    """

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: float,
        now_fn: TimeFn | None = None,
    ) -> None:
        self.limit = max(0, int(limit))
        self.window_seconds = max(0.0, float(window_seconds))
        self._now = now_fn or time.monotonic
        self._events: dict[str, collections.deque[float]] = {}
        self._enabled = self.limit > 0 and self.window_seconds > 0

    def consume(self, key: str) -> None:
        if not self._enabled:
            return

        now = self._now()
        events = self._events.setdefault(key, collections.deque())
        self._prune(events, now)

        if len(events) >= self.limit:
            raise RateLimitError(
                retry_in=max(0.0, (events[0] + self.window_seconds) - now),
                limit=self.limit,
                window_seconds=self.window_seconds,
            )
        events.append(now)

    def release(self, key: str) -> None:
        """Drop the key once its window has drained."""
        events = self._events.get(key)
        if events is None:
            return
        self._prune(events, self._now())
        if not events:
            del self._events[key]

    def tracked_keys(self) -> int:
        return len(self._events)

    def _prune(self, events: collections.deque[float], now: float) -> None:
        cutoff = now - self.window_seconds
        while events and events[0] <= cutoff:
            events.popleft()


__all__ = ["SlidingWindowRateLimiter"]
