"""Request shaping for FRED operations.

Every operation turns its typed parameters into a ``FredRequest`` (endpoint
path plus string query parameters) and hands it to ``_send``. Concrete
clients only implement the transport.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Mapping

from fred_mcp.adapters.rate_limit.base import AbstractRateLimiter
from fred_mcp.core.errors import RateLimitExceededError
from fred_mcp.schemas.requests import (
    GetCategoryRequest,
    GetObservationsRequest,
    GetReleasesRequest,
    GetSeriesRequest,
    GetSeriesUpdatesRequest,
    SearchSeriesRequest,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FredRequest:
    """One outbound call: endpoint path relative to the base URL and its query."""

    endpoint: str
    params: dict[str, str] = field(default_factory=dict)


def _to_query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query(values: Mapping[str, Any]) -> dict[str, str]:
    """Render parameters as query strings, omitting absent and empty values."""

    return {
        key: _to_query_value(value)
        for key, value in values.items()
        if value is not None and value != ""
    }


def category_endpoint(params: GetCategoryRequest) -> str:
    """Pick the category endpoint: series beats children beats the category itself."""

    if params.series:
        return "category/series"
    if params.children:
        return "category/children"
    return "category"


class AbstractFredClient(ABC):
    """Base class for FRED clients.

    Owns the rate limiter check and the mapping of each operation to its
    endpoint and query. Subclasses provide ``_send``.
    """

    def __init__(self, rate_limiter: AbstractRateLimiter) -> None:
        self.rate_limiter = rate_limiter

    @abstractmethod
    async def _send(self, request: FredRequest) -> Any:
        """Issue the outbound call and return the parsed JSON body.

        Raises:
            FredAPIError: On a non-2xx response.
            FredTransportError: If the call could not be completed.
        """
        ...

    async def aclose(self) -> None:
        """Release transport resources. No-op unless the subclass owns any."""

    def _check_rate_limit(self, endpoint: str) -> None:
        # Must not await: check and record happen as one step.
        result = self.rate_limiter.consume()
        if result.allowed:
            return

        logger.warning(
            "rate_limit.exceeded",
            extra={
                "endpoint": endpoint,
                "limit": result.limit,
                "window_s": self.rate_limiter.window_seconds,
                "retry_after_s": result.retry_after_seconds,
            },
        )
        raise RateLimitExceededError.build(
            limit=result.limit,
            window_seconds=self.rate_limiter.window_seconds,
            retry_after=result.retry_after_seconds,
        )

    async def request(self, endpoint: str, params: Mapping[str, Any] | None = None) -> Any:
        """Rate-limit, shape and send one call.

        Raises:
            RateLimitExceededError: If the local budget is spent; nothing is sent.
        """
        self._check_rate_limit(endpoint)
        return await self._send(FredRequest(endpoint=endpoint, params=build_query(params or {})))

    async def search_series(self, params: SearchSeriesRequest) -> Any:
        """Search for economic data series by keyword."""
        return await self.request("series/search", params.model_dump())

    async def get_series(self, params: GetSeriesRequest) -> Any:
        """Get metadata for a specific series."""
        return await self.request("series", {"series_id": params.series_id})

    async def get_observations(self, params: GetObservationsRequest) -> Any:
        """Get observations (data points) for a series."""
        return await self.request("series/observations", params.model_dump())

    async def get_category(self, params: GetCategoryRequest) -> Any:
        """Get a category, its children, or the series in it."""
        return await self.request(
            category_endpoint(params),
            {"category_id": params.category_id},
        )

    async def get_releases(self, params: GetReleasesRequest) -> Any:
        """Get all releases or the release dates schedule."""
        endpoint = "releases/dates" if params.dates else "releases"
        return await self.request(endpoint, params.model_dump(exclude={"dates"}))

    async def get_series_updates(self, params: GetSeriesUpdatesRequest) -> Any:
        """Get recently updated series (proxy for "popular")."""
        return await self.request("series/updates", params.model_dump())
