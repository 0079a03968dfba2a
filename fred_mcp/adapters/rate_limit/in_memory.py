"""In-memory trailing-window rate limiter.

Notes:
- Per-process only: every process gets its own budget.
- Thread-safe: uses a lock around shared state. ``consume`` never awaits, so
  within one event loop it is atomic with respect to other tasks as well.
"""

from __future__ import annotations

import math
import threading
import time
from collections import deque
from typing import Callable

from fred_mcp.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult


class InMemorySlidingWindowRateLimiter(AbstractRateLimiter):
    """Rate limiter counting call instants within a trailing window.

    Every allowed call records its instant. On each check, instants older than
    the window are dropped (lazily, only when checked) and the call is refused
    once ``limit`` instants remain. Refused calls are not recorded, so a burst
    of rejections does not extend the wait. Bursts up to ``limit`` are allowed;
    there is no smoothing.
    """

    def __init__(
        self,
        *,
        limit: int = 120,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the in-memory rate limiter.

        Args:
            limit: Maximum number of calls within the trailing window.
            window_seconds: Size of the trailing window in seconds.
            clock: Time source function returning UNIX time in seconds.

        Raises:
            ValueError: If limit or window_seconds are invalid.
        """
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")

        self._limit = limit
        self._window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.RLock()
        self._timestamps: deque[float] = deque()

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_seconds(self) -> float:
        return self._window_seconds

    def __len__(self) -> int:
        with self._lock:
            return len(self._timestamps)

    def _prune(self, now: float) -> None:
        """Drop instants that are no longer within the window of ``now``."""
        while self._timestamps and now - self._timestamps[0] >= self._window_seconds:
            self._timestamps.popleft()

    def _reset_at(self, now: float) -> float:
        if not self._timestamps:
            return now + self._window_seconds
        return self._timestamps[0] + self._window_seconds

    def consume(self) -> RateLimitResult:
        """Check the trailing window and record the call if it fits.

        Returns:
            RateLimitResult with allowance decision and metadata.
        """
        now = self._clock()

        with self._lock:
            self._prune(now)

            if len(self._timestamps) >= self._limit:
                reset_at = self._reset_at(now)
                return RateLimitResult(
                    allowed=False,
                    limit=self._limit,
                    remaining=0,
                    reset_at=int(math.ceil(reset_at)),
                    retry_after_seconds=max(1, int(math.ceil(reset_at - now))),
                )

            self._timestamps.append(now)
            return RateLimitResult(
                allowed=True,
                limit=self._limit,
                remaining=self._limit - len(self._timestamps),
                reset_at=int(math.ceil(self._reset_at(now))),
                retry_after_seconds=None,
            )

    def reset(self) -> None:
        with self._lock:
            self._timestamps.clear()
