"""
Tests for the Strava API client.

Responses come from httpx.MockTransport; no network access.
"""

import httpx
import pytest

from app.features.strava.client import (
    StravaAPIError,
    StravaAuthError,
    StravaClient,
    StravaNetworkError,
    StravaRateLimiter,
    StravaRateLimitError,
    StravaTimeoutError,
)


def _client(handler, limiter=None) -> StravaClient:
    return StravaClient(
        timeout=1.0,
        transport=httpx.MockTransport(handler),
        limiter=limiter or StravaRateLimiter(),
    )


# =============================================================================
# Successful calls
# =============================================================================

class TestGetActivities:
    """Tests for StravaClient.get_activities()."""

    async def test_returns_page(self, strava_item):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = request.url
            seen["auth"] = request.headers["Authorization"]
            return httpx.Response(200, json=[strava_item(1), strava_item(2)])

        page = await _client(handler).get_activities("tok", page=3, per_page=50)

        assert [item["id"] for item in page] == [1, 2]
        assert seen["url"].path == "/api/v3/athlete/activities"
        assert seen["url"].params["page"] == "3"
        assert seen["url"].params["per_page"] == "50"
        assert seen["auth"] == "Bearer tok"

    async def test_page_size_capped(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["per_page"] = request.url.params["per_page"]
            return httpx.Response(200, json=[])

        await _client(handler).get_activities("tok", per_page=500)

        assert seen["per_page"] == "200"

    async def test_non_list_payload(self):
        client = _client(lambda request: httpx.Response(200, json={"message": "?"}))

        with pytest.raises(StravaAPIError):
            await client.get_activities("tok")


# =============================================================================
# Error classification
# =============================================================================

class TestErrors:
    """Tests for status and transport error mapping."""

    @pytest.mark.parametrize("status", [401, 403])
    async def test_auth_errors(self, status):
        client = _client(lambda request: httpx.Response(status, json={}))

        with pytest.raises(StravaAuthError):
            await client.get_activities("tok")

    async def test_rate_limited_by_strava(self):
        client = _client(lambda request: httpx.Response(429, json={}))

        with pytest.raises(StravaRateLimitError):
            await client.get_activities("tok")

    async def test_server_error(self):
        client = _client(lambda request: httpx.Response(500, text="boom"))

        with pytest.raises(StravaAPIError) as exc_info:
            await client.get_activities("tok")
        assert exc_info.value.status_code == 500

    async def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(StravaTimeoutError):
            await _client(handler).get_activities("tok")

    async def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(StravaNetworkError):
            await _client(handler).get_activities("tok")


# =============================================================================
# Rate limiter
# =============================================================================

class TestRateLimiter:
    """Tests for the local request budget."""

    async def test_refuses_over_short_limit(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json=[])

        client = _client(handler, limiter=StravaRateLimiter(short_limit=1))

        await client.get_activities("tok", rate_limit_key="a")
        with pytest.raises(StravaRateLimitError):
            await client.get_activities("tok", rate_limit_key="a")

        assert len(calls) == 1

    async def test_keys_are_independent(self):
        limiter = StravaRateLimiter(short_limit=1)

        assert await limiter.check_and_increment("a")
        assert await limiter.check_and_increment("b")
        assert not await limiter.check_and_increment("a")
