"""Rate limiting adapters.

Outbound FRED calls are guarded by a limiter injected into the client, so
tests can run independent limiters side by side.
"""

from fred_mcp.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from fred_mcp.adapters.rate_limit.in_memory import InMemorySlidingWindowRateLimiter

__all__ = [
    "AbstractRateLimiter",
    "InMemorySlidingWindowRateLimiter",
    "RateLimitResult",
]
