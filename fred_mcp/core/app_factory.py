"""Application factory for the FastAPI app.

Centralizes app construction (metadata, middleware, handlers, routers, FRED
client lifecycle) so tests can build an app around a fake client.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from fred_mcp.adapters.fred.base import AbstractFredClient
from fred_mcp.adapters.fred.factory import create_fred_client
from fred_mcp.api.routes import fred_router, health_router
from fred_mcp.core.exception_handlers import setup_exception_handlers
from fred_mcp.core.middleware import request_id_middleware


def create_app(
    client: AbstractFredClient | None = None,
    *,
    owns_client: bool = False,
) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        client: FRED client to serve. When omitted, one is built from settings
            at startup and closed at shutdown.
        owns_client: Close the given client at shutdown as well.

    Returns:
        Configured FastAPI app with middleware, handlers and routers.

    Raises:
        ValidationAppError: At startup, if no client is given and
            FRED_API_KEY is missing.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        fred_client = client if client is not None else create_fred_client()
        app.state.fred_client = fred_client
        try:
            yield
        finally:
            if client is None or owns_client:
                await fred_client.aclose()

    app = FastAPI(
        title="FRED MCP API",
        description=(
            "Read-only access to FRED economic data: series search, series "
            "metadata, observations, categories, releases and recently updated "
            "series. Responses are the upstream JSON, passed through as-is."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    app.middleware("http")(request_id_middleware)

    setup_exception_handlers(app)

    app.include_router(fred_router, prefix="/v1")
    app.include_router(health_router)

    return app
