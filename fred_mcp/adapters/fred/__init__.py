"""FRED adapter layer - request shaping over a pluggable transport."""

from fred_mcp.adapters.fred.base import AbstractFredClient, FredRequest, build_query
from fred_mcp.adapters.fred.factory import create_fred_client, create_rate_limiter
from fred_mcp.adapters.fred.httpx_client import HttpxFredClient

__all__ = [
    "AbstractFredClient",
    "FredRequest",
    "HttpxFredClient",
    "build_query",
    "create_fred_client",
    "create_rate_limiter",
]
