"""Rate limiter interfaces.

The FRED client depends on this abstraction (not the concrete implementation)
so tests and alternative deployments can inject their own limiter.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitResult:
    """Result of a check-and-record operation.

    Attributes:
        allowed: Whether the call is allowed to proceed.
        limit: Max calls per window.
        remaining: Calls still available in the trailing window (0 when blocked).
        reset_at: UNIX epoch seconds when the oldest counted call leaves the window.
        retry_after_seconds: Suggested wait time in seconds when blocked.
    """

    allowed: bool
    limit: int
    remaining: int
    reset_at: int
    retry_after_seconds: int | None


class AbstractRateLimiter(ABC):
    """Interface for rate limiters guarding outbound calls."""

    @property
    @abstractmethod
    def limit(self) -> int:
        """Maximum number of calls per window."""

    @property
    @abstractmethod
    def window_seconds(self) -> float:
        """Size of the trailing window in seconds."""

    @abstractmethod
    def consume(self) -> RateLimitResult:
        """Check the budget and record the current call when allowed.

        Returns:
            RateLimitResult describing whether the call may proceed.
        """
        raise NotImplementedError

    @abstractmethod
    def reset(self) -> None:
        """Forget every recorded call."""
        raise NotImplementedError
