"""Fixed-window request counter keyed by client identity."""

from __future__ import annotations

import time
from dataclasses import dataclass
from threading import Lock
from typing import Callable, Optional


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    reset_after_seconds: int


class FixedWindowRateLimiter:
    """Allows ``max_requests`` per client within each ``window_seconds`` window."""

    def __init__(
        self,
        max_requests: int,
        window_seconds: int,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        if max_requests <= 0:
            raise ValueError("max_requests must be > 0")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")
        self._max_requests = max_requests
        self._window_seconds = window_seconds
        self._clock = clock or time.monotonic
        self._windows: dict[str, tuple[float, int]] = {}
        self._last_sweep: Optional[float] = None
        self._lock = Lock()

    @property
    def tracked_clients(self) -> int:
        with self._lock:
            return len(self._windows)

    def _sweep_expired(self, now: float) -> None:
        """Drop windows that have rolled over; runs at most once per window."""
        if self._last_sweep is not None and now - self._last_sweep < self._window_seconds:
            return
        self._last_sweep = now
        expired = [
            key
            for key, (window_start, _) in self._windows.items()
            if now - window_start >= self._window_seconds
        ]
        for key in expired:
            del self._windows[key]

    def hit(self, client_key: str) -> RateLimitDecision:
        now = self._clock()
        with self._lock:
            self._sweep_expired(now)
            window_start, count = self._windows.get(client_key, (now, 0))
            if now - window_start >= self._window_seconds:
                window_start, count = now, 0

            reset_after = max(1, int(window_start + self._window_seconds - now))
            if count >= self._max_requests:
                self._windows[client_key] = (window_start, count)
                return RateLimitDecision(
                    allowed=False,
                    limit=self._max_requests,
                    remaining=0,
                    reset_after_seconds=reset_after,
                )

            count += 1
            self._windows[client_key] = (window_start, count)
            return RateLimitDecision(
                allowed=True,
                limit=self._max_requests,
                remaining=self._max_requests - count,
                reset_after_seconds=reset_after,
            )

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()
            self._last_sweep = None
