"""Tests for FRED request shaping, error mapping and rate limiting."""

from unittest.mock import Mock

import httpx
import pytest

from fred_mcp.adapters.fred.base import FredRequest, build_query, category_endpoint
from fred_mcp.adapters.fred.httpx_client import HttpxFredClient
from fred_mcp.adapters.rate_limit.in_memory import InMemorySlidingWindowRateLimiter
from fred_mcp.core.errors import FredAPIError, FredTransportError, RateLimitExceededError
from fred_mcp.schemas.requests import (
    GetCategoryRequest,
    GetObservationsRequest,
    GetReleasesRequest,
    GetSeriesRequest,
    GetSeriesUpdatesRequest,
    SearchSeriesRequest,
)


class TestBuildQuery:
    def test_omits_none_and_empty_values(self) -> None:
        query = build_query(
            {"series_id": "GDP", "units": None, "observation_start": "", "limit": 5}
        )

        assert query == {"series_id": "GDP", "limit": "5"}

    def test_renders_numbers_as_decimal_text(self) -> None:
        assert build_query({"offset": 0, "category_id": 32991}) == {
            "offset": "0",
            "category_id": "32991",
        }

    @pytest.mark.parametrize(
        ("series", "children", "expected"),
        [
            (False, False, "category"),
            (False, True, "category/children"),
            (True, False, "category/series"),
            (True, True, "category/series"),
        ],
    )
    def test_category_endpoint_priority(self, series: bool, children: bool, expected: str) -> None:
        params = GetCategoryRequest(category_id=1, series=series, children=children)

        assert category_endpoint(params) == expected


class TestOperations:
    @pytest.mark.asyncio
    async def test_search_series_sends_correct_params(self, fred_client, fred_api) -> None:
        fred_api.queue(json={"seriess": []})

        result = await fred_client.search_series(SearchSeriesRequest(search_text="gdp", limit=5))

        url = fred_api.last_url
        assert result == {"seriess": []}
        assert fred_api.requests[-1].method == "GET"
        assert url.path == "/fred/series/search"
        assert url.params.get("api_key") == "test-key"
        assert url.params.get("file_type") == "json"
        assert url.params.get("search_text") == "gdp"
        assert url.params.get("limit") == "5"
        for absent in ("search_type", "offset", "order_by", "sort_order", "tag_names"):
            assert absent not in url.params

    @pytest.mark.asyncio
    async def test_search_series_empty_optional_is_not_sent(self, fred_client, fred_api) -> None:
        await fred_client.search_series(
            SearchSeriesRequest(search_text="cpi", tag_names="", offset=0, sort_order="desc")
        )

        url = fred_api.last_url
        assert "tag_names" not in url.params
        assert url.params.get("offset") == "0"
        assert url.params.get("sort_order") == "desc"

    @pytest.mark.asyncio
    async def test_get_series_sends_correct_params(self, fred_client, fred_api) -> None:
        await fred_client.get_series(GetSeriesRequest(series_id="GDP"))

        url = fred_api.last_url
        assert url.path == "/fred/series"
        assert url.params.get("series_id") == "GDP"

    @pytest.mark.asyncio
    async def test_get_observations_with_date_range(self, fred_client, fred_api) -> None:
        fred_api.queue(json={"observations": []})

        await fred_client.get_observations(
            GetObservationsRequest(
                series_id="UNRATE",
                observation_start="2020-01-01",
                observation_end="2023-12-31",
                units="lin",
            )
        )

        url = fred_api.last_url
        assert url.path == "/fred/series/observations"
        assert url.params.get("series_id") == "UNRATE"
        assert url.params.get("observation_start") == "2020-01-01"
        assert url.params.get("observation_end") == "2023-12-31"
        assert url.params.get("units") == "lin"
        assert "frequency" not in url.params
        assert "limit" not in url.params

    @pytest.mark.asyncio
    async def test_get_category_defaults_to_root(self, fred_client, fred_api) -> None:
        await fred_client.get_category(GetCategoryRequest())

        url = fred_api.last_url
        assert url.path == "/fred/category"
        assert url.params.get("category_id") == "0"

    @pytest.mark.asyncio
    async def test_get_category_children(self, fred_client, fred_api) -> None:
        await fred_client.get_category(GetCategoryRequest(category_id=32991, children=True))

        url = fred_api.last_url
        assert url.path == "/fred/category/children"
        assert url.params.get("category_id") == "32991"
        assert "children" not in url.params

    @pytest.mark.asyncio
    async def test_get_category_series(self, fred_client, fred_api) -> None:
        await fred_client.get_category(GetCategoryRequest(category_id=125, series=True))

        url = fred_api.last_url
        assert url.path == "/fred/category/series"
        assert url.params.get("category_id") == "125"
        assert "series" not in url.params

    @pytest.mark.asyncio
    async def test_get_releases(self, fred_client, fred_api) -> None:
        await fred_client.get_releases(GetReleasesRequest(limit=10))

        url = fred_api.last_url
        assert url.path == "/fred/releases"
        assert url.params.get("limit") == "10"
        assert "dates" not in url.params

    @pytest.mark.asyncio
    async def test_get_releases_dates(self, fred_client, fred_api) -> None:
        await fred_client.get_releases(GetReleasesRequest(dates=True, order_by="name"))

        url = fred_api.last_url
        assert url.path == "/fred/releases/dates"
        assert url.params.get("order_by") == "name"
        assert "dates" not in url.params

    @pytest.mark.asyncio
    async def test_get_series_updates(self, fred_client, fred_api) -> None:
        await fred_client.get_series_updates(GetSeriesUpdatesRequest(limit=5))

        url = fred_api.last_url
        assert url.path == "/fred/series/updates"
        assert url.params.get("limit") == "5"
        assert "offset" not in url.params

    @pytest.mark.asyncio
    async def test_returns_body_unmodified(self, fred_client, fred_api) -> None:
        body = {"seriess": [{"id": "GDP", "title": "Gross Domestic Product"}], "count": 1}
        fred_api.queue(json=body)

        assert await fred_client.get_series(GetSeriesRequest(series_id="GDP")) == body


class TestErrors:
    @pytest.mark.asyncio
    async def test_raises_on_api_error(self, fred_client, fred_api) -> None:
        fred_api.queue(400, text='{"error_message":"Bad Request"}')

        with pytest.raises(FredAPIError, match="FRED API error 400") as exc:
            await fred_client.get_series(GetSeriesRequest(series_id="INVALID"))

        assert exc.value.status_code == 400
        assert exc.value.body == '{"error_message":"Bad Request"}'
        assert exc.value.code == "fred_upstream_error"

    @pytest.mark.asyncio
    async def test_transport_failure_is_wrapped(self, limiter) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = HttpxFredClient(
            "test-key",
            rate_limiter=limiter,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )

        with pytest.raises(FredTransportError) as exc:
            await client.get_series(GetSeriesRequest(series_id="GDP"))

        assert isinstance(exc.value.__cause__, httpx.ConnectError)
        assert exc.value.code == "fred_transport_error"


class TestRateLimiting:
    @pytest.mark.asyncio
    async def test_rate_limits_after_120_requests(self, fred_client, fred_api) -> None:
        for _ in range(120):
            await fred_client.get_series(GetSeriesRequest(series_id="GDP"))

        with pytest.raises(RateLimitExceededError, match="rate limit") as exc:
            await fred_client.get_series(GetSeriesRequest(series_id="GDP"))

        assert len(fred_api.requests) == 120
        assert exc.value.details["limit"] == 120
        assert exc.value.retry_after == 60

    @pytest.mark.asyncio
    async def test_recovers_after_window(self, fred_client, fred_api, clock) -> None:
        for _ in range(120):
            await fred_client.get_series_updates(GetSeriesUpdatesRequest())
        with pytest.raises(RateLimitExceededError):
            await fred_client.get_series_updates(GetSeriesUpdatesRequest())

        clock.return_value += 61
        await fred_client.get_series_updates(GetSeriesUpdatesRequest())

        assert len(fred_api.requests) == 121

    @pytest.mark.asyncio
    async def test_reset_restores_budget(self, fred_client, fred_api, limiter) -> None:
        for _ in range(120):
            await fred_client.get_releases(GetReleasesRequest())

        limiter.reset()

        await fred_client.get_releases(GetReleasesRequest())
        assert len(fred_api.requests) == 121

    @pytest.mark.asyncio
    async def test_rejected_call_makes_no_outbound_request(self, fred_api) -> None:
        limiter = InMemorySlidingWindowRateLimiter(
            limit=1, window_seconds=60, clock=Mock(return_value=0.0)
        )
        client = HttpxFredClient(
            "test-key",
            rate_limiter=limiter,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(fred_api)),
        )

        await client.get_category(GetCategoryRequest())
        with pytest.raises(RateLimitExceededError):
            await client.get_category(GetCategoryRequest())

        assert len(fred_api.requests) == 1

    @pytest.mark.asyncio
    async def test_failed_upstream_call_still_counts(self, fred_api) -> None:
        limiter = InMemorySlidingWindowRateLimiter(
            limit=1, window_seconds=60, clock=Mock(return_value=0.0)
        )
        client = HttpxFredClient(
            "test-key",
            rate_limiter=limiter,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(fred_api)),
        )
        fred_api.queue(500, text="Internal Server Error")

        with pytest.raises(FredAPIError):
            await client.get_series(GetSeriesRequest(series_id="GDP"))
        with pytest.raises(RateLimitExceededError):
            await client.get_series(GetSeriesRequest(series_id="GDP"))


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_owned_client_closed_on_exit(self, limiter) -> None:
        async with HttpxFredClient("test-key", rate_limiter=limiter) as client:
            assert client.client.is_closed is False

        assert client.client.is_closed is True

    @pytest.mark.asyncio
    async def test_injected_client_left_open(self, limiter) -> None:
        http_client = httpx.AsyncClient()
        client = HttpxFredClient("test-key", rate_limiter=limiter, http_client=http_client)

        await client.aclose()

        assert http_client.is_closed is False
        await http_client.aclose()

    def test_custom_base_url_and_timeout(self, limiter) -> None:
        client = HttpxFredClient(
            "test-key",
            rate_limiter=limiter,
            base_url="https://fred.example/api/",
            timeout_seconds=12.5,
        )

        assert client.url_for("series") == "https://fred.example/api/series"
        assert client.client.timeout.read == 12.5
        assert FredRequest("series").params == {}
