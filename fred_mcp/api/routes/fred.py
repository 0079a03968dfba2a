"""Read-only HTTP routes mirroring the FRED MCP tools.

Upstream JSON is passed through unmodified. Errors are mapped to HTTP
responses by the global exception handlers.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request

from fred_mcp.adapters.fred.base import AbstractFredClient
from fred_mcp.schemas.requests import (
    GetCategoryRequest,
    GetObservationsRequest,
    GetReleasesRequest,
    GetSeriesRequest,
    GetSeriesUpdatesRequest,
    SearchSeriesRequest,
)

router = APIRouter(tags=["FRED"])


def get_fred_client(request: Request) -> AbstractFredClient:
    """Return the FRED client attached to the app during startup."""
    return request.app.state.fred_client


FredClientDep = Annotated[AbstractFredClient, Depends(get_fred_client)]


@router.get("/series/search")
async def search_series(
    params: Annotated[SearchSeriesRequest, Query()],
    client: FredClientDep,
) -> Any:
    """Search for economic data series by keyword."""
    return await client.search_series(params)


@router.get("/series/observations")
async def get_observations(
    params: Annotated[GetObservationsRequest, Query()],
    client: FredClientDep,
) -> Any:
    """Get observations (data points) for a series."""
    return await client.get_observations(params)


@router.get("/series/updates")
async def get_series_updates(
    params: Annotated[GetSeriesUpdatesRequest, Query()],
    client: FredClientDep,
) -> Any:
    """Get recently updated series."""
    return await client.get_series_updates(params)


@router.get("/series")
async def get_series(
    params: Annotated[GetSeriesRequest, Query()],
    client: FredClientDep,
) -> Any:
    """Get metadata for a specific series."""
    return await client.get_series(params)


@router.get("/category")
async def get_category(
    params: Annotated[GetCategoryRequest, Query()],
    client: FredClientDep,
) -> Any:
    """Get a category, its children (children=true) or its series (series=true)."""
    return await client.get_category(params)


@router.get("/releases")
async def get_releases(
    params: Annotated[GetReleasesRequest, Query()],
    client: FredClientDep,
) -> Any:
    """Get all releases, or release dates when dates=true."""
    return await client.get_releases(params)
