"""
HTTP-level tests for the v1 API.

The app runs in-process over httpx.ASGITransport with the database,
session store and Strava dependencies overridden.
"""

from urllib.parse import parse_qs, urlparse

import httpx
import pytest
import pytest_asyncio

from app.api.deps import (
    SESSION_HEADER,
    get_session_store,
    get_strava_client,
    get_strava_oauth,
)
from app.config import settings
from app.db.session import get_async_db
from app.features.strava import StravaAuthError, StravaOAuth
from app.main import app


TOKEN_RESPONSE = {
    "access_token": "live-token",
    "expires_at": 1999999999,
    "athlete": {"id": 555, "firstname": "Ada", "lastname": "Runner"},
}


@pytest.fixture
def strava(fake_strava):
    """Mutable stand-in shared by the app and the test."""
    return fake_strava()


@pytest_asyncio.fixture
async def client(db, sessions, strava):
    async def override_db():
        yield db

    def token_handler(request: httpx.Request) -> httpx.Response:
        form = parse_qs(request.content.decode())
        if form.get("code") == ["good"]:
            return httpx.Response(200, json=TOKEN_RESPONSE)
        return httpx.Response(400, json={"message": "Bad Request"})

    app.dependency_overrides[get_async_db] = override_db
    app.dependency_overrides[get_session_store] = lambda: sessions
    app.dependency_overrides[get_strava_client] = lambda: strava
    app.dependency_overrides[get_strava_oauth] = lambda: StravaOAuth(
        transport=httpx.MockTransport(token_handler)
    )

    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as http:
        yield http

    app.dependency_overrides.clear()


def _headers(session) -> dict:
    return {SESSION_HEADER: session.session_id}


# =============================================================================
# Health
# =============================================================================

class TestHealth:

    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


# =============================================================================
# Auth
# =============================================================================

class TestAuth:
    """Tests for authorization and session routes."""

    async def test_authorization_url(self, client, monkeypatch):
        monkeypatch.setattr(settings, "strava_client_id", "12345")

        response = await client.get("/api/v1/auth/strava/url", params={"state": "xyz"})

        assert response.status_code == 200
        query = parse_qs(urlparse(response.json()["url"]).query)
        assert query["client_id"] == ["12345"]
        assert query["state"] == ["xyz"]
        assert query["scope"] == ["read,activity:read_all"]

    async def test_authorization_url_unconfigured(self, client, monkeypatch):
        monkeypatch.setattr(settings, "strava_client_id", None)

        response = await client.get("/api/v1/auth/strava/url")

        assert response.status_code == 503

    async def test_exchange_creates_session(self, client, sessions):
        response = await client.post("/api/v1/auth/strava/exchange", json={"code": "good"})

        assert response.status_code == 200
        body = response.json()
        assert body["athlete_id"] == "555"
        assert body["athlete_name"] == "Ada Runner"
        session = sessions.get(body["session_id"])
        assert session.access_token == "live-token"
        assert session.expires_at == TOKEN_RESPONSE["expires_at"]

    async def test_exchange_rejected(self, client, sessions):
        response = await client.post("/api/v1/auth/strava/exchange", json={"code": "bad"})

        assert response.status_code == 400
        assert len(sessions) == 0

    async def test_logout(self, client, sessions, athlete_session):
        response = await client.delete("/api/v1/session", headers=_headers(athlete_session))

        assert response.json() == {"ended": True}
        assert sessions.get(athlete_session.session_id) is None

    async def test_logout_without_session(self, client):
        response = await client.delete("/api/v1/session")

        assert response.json() == {"ended": False}


# =============================================================================
# Activities
# =============================================================================

class TestActivities:
    """Tests for /activities."""

    async def test_requires_session(self, client):
        response = await client.get("/api/v1/activities")

        assert response.status_code == 401

    async def test_unknown_session(self, client):
        response = await client.get("/api/v1/activities", headers={SESSION_HEADER: "nope"})

        assert response.status_code == 401

    async def test_expired_session(self, client, sessions):
        session = sessions.create("1001", "Ada Runner", "tok", expires_at=1)

        response = await client.get("/api/v1/activities", headers=_headers(session))

        assert response.status_code == 401
        assert len(sessions) == 0

    async def test_first_load_then_cache(self, client, strava, athlete_session, make_page):
        strava.pages = [make_page(3)]

        first = await client.get("/api/v1/activities", headers=_headers(athlete_session))
        second = await client.get("/api/v1/activities", headers=_headers(athlete_session))

        assert first.json()["source"] == "strava"
        assert first.json()["total"] == 3
        assert second.json()["source"] == "cache"
        assert strava.pages_requested == [1]

    async def test_activity_fields(self, client, strava, athlete_session, strava_item):
        strava.pages = [[strava_item(1, distance=10000.0, moving_time=3000, average_heartrate=150.0)]]

        response = await client.get("/api/v1/activities", headers=_headers(athlete_session))

        activity = response.json()["activities"][0]
        assert activity["distance_km"] == 10.0
        assert activity["pace"] == "5:00 /km"
        assert activity["moving_time"] == "50:00"
        assert activity["average_heartrate"] == 150.0

    async def test_strava_failure_ends_session(self, client, strava, sessions, athlete_session):
        strava.errors = {1: StravaAuthError("revoked")}

        response = await client.get("/api/v1/activities", headers=_headers(athlete_session))

        assert response.status_code == 401
        assert sessions.get(athlete_session.session_id) is None

    async def test_forced_sync(self, client, strava, athlete_session, make_page):
        strava.pages = [make_page(2)]

        response = await client.post("/api/v1/activities/sync", headers=_headers(athlete_session))

        assert response.status_code == 200
        assert response.json()["runs"] == 2
        assert response.json()["pages"] == 1

    async def test_sync_start_page_validated(self, client, athlete_session):
        response = await client.post(
            "/api/v1/activities/sync",
            params={"start_page": 0},
            headers=_headers(athlete_session),
        )

        assert response.status_code == 422


# =============================================================================
# Analysis
# =============================================================================

class TestAnalysis:
    """Tests for presets and comparison."""

    async def test_presets(self, client):
        response = await client.get("/api/v1/presets")

        keys = [p["key"] for p in response.json()]
        assert keys == ["5k", "10k", "half", "marathon"]
        ten_k = response.json()[1]
        assert (ten_k["min_km"], ten_k["max_km"]) == (9.0, 11.0)

    async def test_compare_preset(self, client, strava, athlete_session, strava_item):
        strava.pages = [[
            strava_item(1, distance=10000.0, moving_time=3000),
            strava_item(2, distance=9500.0, moving_time=2660),
            strava_item(3, distance=5000.0, moving_time=1400),
        ]]

        response = await client.get(
            "/api/v1/analysis/compare",
            params={"preset": "10k"},
            headers=_headers(athlete_session),
        )

        body = response.json()
        assert response.status_code == 200
        assert [m["external_id"] for m in body["matches"]] == [2, 1]
        assert body["summary"]["total_runs"] == 2
        assert body["summary"]["best_time_seconds"] == 2660
        assert body["summary"]["avg_heart_rate"] is None

    async def test_compare_custom_distance(self, client, strava, athlete_session, strava_item):
        strava.pages = [[strava_item(1, distance=15200.0, moving_time=4500)]]

        response = await client.get(
            "/api/v1/analysis/compare",
            params={"distance_km": 15},
            headers=_headers(athlete_session),
        )

        body = response.json()
        assert body["preset"]["key"] is None
        assert body["preset"]["tolerance_km"] == 1.5
        assert len(body["matches"]) == 1

    async def test_compare_no_matches(self, client, strava, athlete_session, strava_item):
        strava.pages = [[strava_item(1, distance=5000.0)]]

        response = await client.get(
            "/api/v1/analysis/compare",
            params={"preset": "marathon"},
            headers=_headers(athlete_session),
        )

        assert response.json()["matches"] == []
        assert response.json()["summary"] is None

    @pytest.mark.parametrize("params", [
        {"preset": "ultra"},
        {"distance_km": -3},
        {},
    ])
    async def test_invalid_target(self, client, strava, athlete_session, params):
        response = await client.get(
            "/api/v1/analysis/compare",
            params=params,
            headers=_headers(athlete_session),
        )

        assert response.status_code == 422
        assert strava.calls == []
