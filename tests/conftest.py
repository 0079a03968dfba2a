"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
It sets the environment before anything imports the settings module.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("FRED_API_KEY", "test-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from unittest.mock import Mock

import httpx
import pytest

from fred_mcp.adapters.fred.httpx_client import HttpxFredClient
from fred_mcp.adapters.rate_limit.in_memory import InMemorySlidingWindowRateLimiter


class FakeFredAPI:
    """httpx mock transport handler recording every outbound request.

    Queued responses are served in order; when the queue is empty an empty
    JSON object is returned with status 200.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: list[httpx.Response] = []

    def queue(self, status_code: int = 200, **kwargs) -> None:
        self._responses.append(httpx.Response(status_code, **kwargs))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._responses:
            return self._responses.pop(0)
        return httpx.Response(200, json={})

    @property
    def last_url(self) -> httpx.URL:
        return self.requests[-1].url


@pytest.fixture
def clock() -> Mock:
    return Mock(return_value=1000.0)


@pytest.fixture
def limiter(clock: Mock) -> InMemorySlidingWindowRateLimiter:
    return InMemorySlidingWindowRateLimiter(limit=120, window_seconds=60, clock=clock)


@pytest.fixture
def fred_api() -> FakeFredAPI:
    return FakeFredAPI()


@pytest.fixture
def fred_client(fred_api: FakeFredAPI, limiter: InMemorySlidingWindowRateLimiter) -> HttpxFredClient:
    """FRED client wired to the fake API instead of the network."""
    return HttpxFredClient(
        api_key="test-key",
        rate_limiter=limiter,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(fred_api)),
    )
