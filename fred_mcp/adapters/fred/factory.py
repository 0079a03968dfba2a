"""Factory for the FRED client used by the server entry points."""

from fred_mcp.adapters.fred.base import AbstractFredClient
from fred_mcp.adapters.fred.httpx_client import HttpxFredClient
from fred_mcp.adapters.rate_limit.in_memory import InMemorySlidingWindowRateLimiter
from fred_mcp.core.config import FRED_API_KEY_URL, FredSettings, settings
from fred_mcp.core.errors import ValidationAppError


def create_rate_limiter(fred_settings: FredSettings | None = None) -> InMemorySlidingWindowRateLimiter:
    """Build a fresh limiter from the configured budget."""
    cfg = fred_settings or settings.fred
    return InMemorySlidingWindowRateLimiter(
        limit=cfg.rate_limit_requests,
        window_seconds=cfg.rate_limit_window_seconds,
    )


def create_fred_client(fred_settings: FredSettings | None = None) -> AbstractFredClient:
    """Instantiate the FRED client from configuration.

    Each client gets its own rate limiter; share a client to share the budget.

    Returns:
        AbstractFredClient: Configured client instance.

    Raises:
        ValidationAppError: If FRED_API_KEY is not configured.
    """
    cfg = fred_settings or settings.fred

    if not cfg.api_key:
        raise ValidationAppError(
            code="fred_missing_api_key",
            message="FRED_API_KEY environment variable is required.",
            details={"context": {"api_key_url": FRED_API_KEY_URL}},
        )

    return HttpxFredClient(
        api_key=cfg.api_key,
        rate_limiter=create_rate_limiter(cfg),
        base_url=cfg.base_url,
        timeout_seconds=cfg.timeout_seconds,
    )
