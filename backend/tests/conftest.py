"""
Shared fixtures.

- In-memory SQLite (aiosqlite) with the schema created per test
- Builders for Strava list items and Activity values
- A scripted stand-in for the Strava activities endpoint
"""

from datetime import datetime, timedelta

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.features.session import SessionStore
from app.features.strava import Activity
from app.features.strava import models  # noqa: F401  (registers tables)
from app.models.base import Base


BASE_DATE = datetime(2024, 1, 1, 7, 0, 0)


# =============================================================================
# Database
# =============================================================================

@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db(engine):
    """Async session bound to the in-memory database."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


# =============================================================================
# Builders
# =============================================================================

def _strava_item(
    id: int,
    distance: float = 10000.0,
    moving_time: int = 3000,
    type: str = "Run",
    average_heartrate: float | None = None,
    days: int = 0,
    name: str | None = None,
) -> dict:
    item = {
        "id": id,
        "name": name or f"Run {id}",
        "distance": distance,
        "moving_time": moving_time,
        "type": type,
        "start_date": (BASE_DATE + timedelta(days=days)).strftime("%Y-%m-%dT%H:%M:%SZ"),
    }
    if average_heartrate is not None:
        item["average_heartrate"] = average_heartrate
    return item


def _activity(
    id: int,
    distance_km: float = 10.0,
    moving_time: int = 3000,
    heart_rate: float | None = None,
    days: int = 0,
    type: str = "Run",
) -> Activity:
    return Activity(
        external_id=id,
        name=f"Run {id}",
        distance_m=distance_km * 1000,
        moving_time_s=moving_time,
        average_heartrate=heart_rate,
        activity_type=type,
        start_date=BASE_DATE + timedelta(days=days),
    )


@pytest.fixture
def strava_item():
    """Build a /athlete/activities list item."""
    return _strava_item


@pytest.fixture
def make_activity():
    """Build an Activity value."""
    return _activity


@pytest.fixture
def make_page():
    """Build a page of `count` Run items with consecutive ids."""
    def _page(count: int, first_id: int = 1, type: str = "Run") -> list[dict]:
        return [
            _strava_item(first_id + i, type=type, days=first_id + i)
            for i in range(count)
        ]
    return _page


# =============================================================================
# Strava stand-in
# =============================================================================

class FakeStravaClient:
    """
    Scripted activities endpoint.

    pages[n] is returned for page n + 1; pages past the end are empty.
    errors maps a page number to the exception raised for it.
    """

    def __init__(self, pages: list[list[dict]] | None = None, errors: dict | None = None):
        self.pages = pages or []
        self.errors = errors or {}
        self.calls: list[dict] = []

    async def get_activities(self, access_token, page=1, per_page=200, rate_limit_key="global"):
        self.calls.append({"page": page, "per_page": per_page, "token": access_token})
        if page in self.errors:
            raise self.errors[page]
        if page <= len(self.pages):
            return list(self.pages[page - 1])
        return []

    @property
    def pages_requested(self) -> list[int]:
        return [call["page"] for call in self.calls]


@pytest.fixture
def fake_strava():
    return FakeStravaClient


@pytest.fixture
def sessions():
    """Isolated session registry."""
    return SessionStore()


@pytest.fixture
def athlete_session(sessions):
    return sessions.create("1001", "Ada Runner", "token-abc")
