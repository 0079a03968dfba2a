"""FRED client adapter over httpx."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from fred_mcp.adapters.fred.base import AbstractFredClient, FredRequest
from fred_mcp.adapters.rate_limit.base import AbstractRateLimiter
from fred_mcp.core.config import FRED_BASE_URL
from fred_mcp.core.errors import FredAPIError, FredTransportError
from fred_mcp.core.logging import redact_secrets

logger = logging.getLogger(__name__)


class HttpxFredClient(AbstractFredClient):
    """Client for the FRED REST API using an ``httpx.AsyncClient``.

    Every call attaches the API key and ``file_type=json``. Responses are
    returned as parsed JSON without interpretation. No retries are made.
    """

    def __init__(
        self,
        api_key: str,
        *,
        rate_limiter: AbstractRateLimiter,
        base_url: str = FRED_BASE_URL,
        timeout_seconds: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: FRED API key sent with every request.
            rate_limiter: Limiter checked before every outbound call.
            base_url: FRED API base URL.
            timeout_seconds: Request timeout; ``None`` keeps the httpx default.
            http_client: Pre-built client (tests inject one with a mock
                transport). When given, the caller owns its lifecycle.
        """
        super().__init__(rate_limiter)
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")

        if http_client is None:
            client_kwargs: dict[str, Any] = {}
            if timeout_seconds is not None:
                client_kwargs["timeout"] = timeout_seconds
            http_client = httpx.AsyncClient(**client_kwargs)
            self._owns_client = True
        else:
            self._owns_client = False
        self.client = http_client

    async def __aenter__(self) -> "HttpxFredClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self.client.aclose()

    def url_for(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint}"

    async def _send(self, request: FredRequest) -> Any:
        params = {"api_key": self.api_key, "file_type": "json", **request.params}

        logger.info(
            "fred.request",
            extra={"endpoint": request.endpoint, "params": request.params},
        )
        start = time.perf_counter()
        try:
            response = await self.client.get(self.url_for(request.endpoint), params=params)
        except httpx.HTTPError as exc:
            logger.error(
                "fred.transport_error",
                extra={"endpoint": request.endpoint, "error_type": type(exc).__name__},
            )
            raise FredTransportError(
                code="fred_transport_error",
                message=redact_secrets(f"FRED API request failed: {type(exc).__name__}: {exc}"),
                details={"endpoint": request.endpoint, "error_type": type(exc).__name__},
            ) from exc

        duration_ms = (time.perf_counter() - start) * 1000

        if not response.is_success:
            logger.warning(
                "fred.upstream_error",
                extra={
                    "endpoint": request.endpoint,
                    "status_code": response.status_code,
                    "duration_ms": round(duration_ms, 2),
                },
            )
            raise FredAPIError.build(
                status_code=response.status_code,
                body=response.text,
                endpoint=request.endpoint,
            )

        logger.info(
            "fred.response",
            extra={
                "endpoint": request.endpoint,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response.json()
