"""MCP tool surface for the FRED operations.

Each tool validates its arguments, calls the FRED client and returns the
upstream JSON as one pretty-printed text payload. Errors propagate; FastMCP
reports them to the caller as tool errors.
"""

from __future__ import annotations

import json
import logging
from typing import Annotated, Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from fred_mcp.adapters.fred.base import AbstractFredClient
from fred_mcp.schemas.requests import (
    DEFAULT_LIST_LIMIT,
    Frequency,
    GetCategoryRequest,
    GetObservationsRequest,
    GetReleasesRequest,
    GetSeriesRequest,
    GetSeriesUpdatesRequest,
    ReleaseOrderBy,
    SearchOrderBy,
    SearchSeriesRequest,
    SearchType,
    SortOrder,
    Units,
)

logger = logging.getLogger(__name__)

SERVER_NAME = "mcp-fred"

Offset = Annotated[int | None, Field(ge=0, description="Result offset for pagination")]


def render_json(data: Any) -> str:
    """Render an upstream payload the way every tool returns it."""
    return json.dumps(data, indent=2, ensure_ascii=False)


class FredTools:
    """Tool handlers bound to one FRED client."""

    def __init__(self, client: AbstractFredClient) -> None:
        self.client = client

    async def search_series(
        self,
        search_text: Annotated[str, Field(description="Keywords to search for")],
        search_type: Annotated[
            SearchType | None, Field(description="Type of search (default: full_text)")
        ] = None,
        limit: Annotated[
            int, Field(ge=1, le=1000, description="Max results (default: 20)")
        ] = DEFAULT_LIST_LIMIT,
        offset: Offset = None,
        order_by: SearchOrderBy | None = None,
        sort_order: SortOrder | None = None,
        tag_names: Annotated[
            str | None, Field(description="Semicolon-delimited tag names to filter by")
        ] = None,
    ) -> str:
        """Search for FRED economic data series by keyword"""
        data = await self.client.search_series(
            SearchSeriesRequest(
                search_text=search_text,
                search_type=search_type,
                limit=limit,
                offset=offset,
                order_by=order_by,
                sort_order=sort_order,
                tag_names=tag_names,
            )
        )
        return render_json(data)

    async def get_series(
        self,
        series_id: Annotated[
            str, Field(description="FRED series ID (e.g. GDP, UNRATE, CPIAUCSL)")
        ],
    ) -> str:
        """Get metadata for a specific FRED series"""
        data = await self.client.get_series(GetSeriesRequest(series_id=series_id))
        return render_json(data)

    async def get_observations(
        self,
        series_id: Annotated[str, Field(description="FRED series ID")],
        observation_start: Annotated[
            str | None, Field(description="Start date (YYYY-MM-DD)")
        ] = None,
        observation_end: Annotated[str | None, Field(description="End date (YYYY-MM-DD)")] = None,
        limit: Annotated[
            int | None,
            Field(ge=1, le=100000, description="Max observations (default: 10000)"),
        ] = None,
        offset: Annotated[
            int | None, Field(ge=0, description="Observation offset for pagination")
        ] = None,
        sort_order: Annotated[
            SortOrder | None, Field(description="Sort by date (default: asc)")
        ] = None,
        units: Annotated[
            Units | None,
            Field(description="Data transformation (lin=levels, pch=% change, etc.)"),
        ] = None,
        frequency: Annotated[Frequency | None, Field(description="Frequency aggregation")] = None,
    ) -> str:
        """Get data points (observations) for a FRED series"""
        data = await self.client.get_observations(
            GetObservationsRequest(
                series_id=series_id,
                observation_start=observation_start,
                observation_end=observation_end,
                limit=limit,
                offset=offset,
                sort_order=sort_order,
                units=units,
                frequency=frequency,
            )
        )
        return render_json(data)

    async def get_categories(
        self,
        category_id: Annotated[
            int | None, Field(description="Category ID (default: 0 = root)")
        ] = None,
        children: Annotated[
            bool | None,
            Field(description="Get child categories instead of the category itself"),
        ] = None,
        series: Annotated[bool | None, Field(description="Get series in this category")] = None,
    ) -> str:
        """Browse the FRED category tree"""
        data = await self.client.get_category(
            GetCategoryRequest(
                category_id=category_id if category_id is not None else 0,
                children=bool(children),
                series=bool(series),
            )
        )
        return render_json(data)

    async def get_releases(
        self,
        dates: Annotated[
            bool | None, Field(description="Get release dates instead of releases")
        ] = None,
        limit: Annotated[int | None, Field(ge=1, le=1000, description="Max results")] = None,
        offset: Offset = None,
        order_by: ReleaseOrderBy | None = None,
        sort_order: SortOrder | None = None,
    ) -> str:
        """Get economic data releases and schedules"""
        data = await self.client.get_releases(
            GetReleasesRequest(
                dates=bool(dates),
                limit=limit,
                offset=offset,
                order_by=order_by,
                sort_order=sort_order,
            )
        )
        return render_json(data)

    async def get_popular_series(
        self,
        limit: Annotated[
            int, Field(ge=1, le=1000, description="Max results (default: 20)")
        ] = DEFAULT_LIST_LIMIT,
        offset: Offset = None,
    ) -> str:
        """Get recently updated/popular FRED series"""
        data = await self.client.get_series_updates(
            GetSeriesUpdatesRequest(limit=limit, offset=offset)
        )
        return render_json(data)


TOOL_NAMES = (
    "search_series",
    "get_series",
    "get_observations",
    "get_categories",
    "get_releases",
    "get_popular_series",
)


def register_tools(server: FastMCP, client: AbstractFredClient) -> FredTools:
    """Register the six FRED tools on ``server``.

    Returns:
        FredTools: The handler object, useful for direct calls in tests.
    """
    tools = FredTools(client)
    for name in TOOL_NAMES:
        # Plain text content only: the payload is already JSON text.
        server.add_tool(getattr(tools, name), name=name, structured_output=False)
    logger.debug("mcp.tools_registered", extra={"tools": list(TOOL_NAMES)})
    return tools


def create_mcp_server(
    client: AbstractFredClient,
    *,
    host: str = "127.0.0.1",
    port: int = 8000,
    debug: bool = False,
) -> FastMCP:
    """Build the FastMCP server exposing the FRED tools."""
    server = FastMCP(SERVER_NAME, host=host, port=port, debug=debug)
    register_tools(server, client)
    return server
