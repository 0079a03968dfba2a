"""Pydantic schemas for FRED query parameters.

Each model mirrors the documented parameter set of one operation: required
fields, enumerated value sets and numeric bounds. Values left as ``None`` are
omitted from the outbound query.
"""

from typing import Literal

from pydantic import BaseModel, Field

SearchType = Literal["full_text", "series_id"]
SortOrder = Literal["asc", "desc"]
SearchOrderBy = Literal[
    "search_rank",
    "series_id",
    "title",
    "units",
    "frequency",
    "seasonal_adjustment",
    "realtime_start",
    "realtime_end",
    "last_updated",
    "observation_start",
    "observation_end",
    "popularity",
    "group_popularity",
]
ReleaseOrderBy = Literal["release_id", "name", "press_release", "realtime_start", "realtime_end"]
Units = Literal["lin", "chg", "ch1", "pch", "pc1", "pca", "cch", "cca", "log"]
Frequency = Literal["d", "w", "bw", "m", "q", "sa", "a"]

DEFAULT_LIST_LIMIT = 20


class SearchSeriesRequest(BaseModel):
    """Full-text or id search over FRED series."""

    search_text: str = Field(..., description="Keywords to search for")
    search_type: SearchType | None = Field(
        None, description="Type of search (default: full_text)"
    )
    limit: int | None = Field(None, ge=1, le=1000, description="Max results")
    offset: int | None = Field(None, ge=0, description="Result offset for pagination")
    order_by: SearchOrderBy | None = None
    sort_order: SortOrder | None = None
    tag_names: str | None = Field(
        None, description="Semicolon-delimited tag names to filter by"
    )


class GetSeriesRequest(BaseModel):
    """Metadata lookup for a single series."""

    series_id: str = Field(..., description="FRED series ID (e.g. GDP, UNRATE, CPIAUCSL)")


class GetObservationsRequest(BaseModel):
    """Data points of a series, optionally transformed or aggregated."""

    series_id: str = Field(..., description="FRED series ID")
    observation_start: str | None = Field(None, description="Start date (YYYY-MM-DD)")
    observation_end: str | None = Field(None, description="End date (YYYY-MM-DD)")
    limit: int | None = Field(None, ge=1, le=100000, description="Max observations")
    offset: int | None = Field(None, ge=0, description="Observation offset for pagination")
    sort_order: SortOrder | None = Field(None, description="Sort by date (default: asc)")
    units: Units | None = Field(
        None, description="Data transformation (lin=levels, pch=% change, etc.)"
    )
    frequency: Frequency | None = Field(None, description="Frequency aggregation")


class GetCategoryRequest(BaseModel):
    """Category tree lookup.

    ``series`` and ``children`` pick the endpoint rather than being sent;
    ``series`` wins when both are set.
    """

    category_id: int = Field(0, description="Category ID (default: 0 = root)")
    children: bool = Field(False, description="Get child categories instead of the category itself")
    series: bool = Field(False, description="Get series in this category")


class GetReleasesRequest(BaseModel):
    """Releases or release dates, depending on ``dates``."""

    dates: bool = Field(False, description="Get release dates instead of releases")
    limit: int | None = Field(None, ge=1, le=1000, description="Max results")
    offset: int | None = Field(None, ge=0, description="Result offset for pagination")
    order_by: ReleaseOrderBy | None = None
    sort_order: SortOrder | None = None


class GetSeriesUpdatesRequest(BaseModel):
    """Recently updated series, used as a popularity proxy."""

    limit: int | None = Field(None, ge=1, le=1000, description="Max results")
    offset: int | None = Field(None, ge=0, description="Result offset for pagination")
