"""
Strava sync orchestration.

Produces a de-duplicated, up-to-date set of runs for one athlete session
while keeping calls to Strava to a minimum.

Load Flow:
1. Read the athlete's partition from the store.
   - Rows found: serve them (one store read, no Strava call).
   - Store unavailable: log and fall through to a live sync.
2. Live sync from page 1:
   - Request pages sequentially while each page comes back full.
   - A short page ends the pass. Strava has no "has more" flag, so a
     history that is an exact multiple of the page size costs one extra
     (empty) request.
   - Every page is committed before the next one is requested.

Any Strava failure (revoked token, rate limit, timeout, network) ends the
session: the credential is dropped and the caller must re-authorize.
Store failures leave the session alone and are reported with the page
that failed so the caller can resume from it.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.features.session import AthleteSession, SessionStore, session_store

from ..activity import Activity
from ..client import StravaClient, StravaError
from ..repository import ActivityStoreError, StravaActivityRepository
from .activities import ActivitySyncService
from .config import SyncConfig

logger = logging.getLogger(__name__)


class SessionExpiredError(Exception):
    """The athlete session was torn down; re-run the Strava authorization."""

    def __init__(self, message: str, athlete_id: str | None = None):
        super().__init__(message)
        self.athlete_id = athlete_id


@dataclass
class SyncResult:
    """Totals of one pagination pass."""

    pages: int = 0
    fetched: int = 0
    runs: int = 0
    activities: list[Activity] = field(default_factory=list)
    truncated: bool = False  # stopped at MAX_PAGES


@dataclass
class LoadResult:
    """Activities for a session and where they came from."""

    activities: list[Activity]
    source: str  # "cache" or "strava"
    sync: Optional[SyncResult] = None


def newest_first(activities: list[Activity]) -> list[Activity]:
    """Order like a store read: start date descending, stable."""
    return sorted(activities, key=lambda a: a.start_date, reverse=True)


class ActivitySynchronizer:
    """
    Main sync orchestrator.

    Usage:
        sync = ActivitySynchronizer(db)
        result = await sync.load_activities(session)
        result.activities  # newest first
    """

    def __init__(
        self,
        db: AsyncSession,
        client: Optional[StravaClient] = None,
        sessions: Optional[SessionStore] = None,
        page_size: Optional[int] = None
    ):
        self.db = db
        self.client = client or StravaClient()
        self.sessions = sessions if sessions is not None else session_store
        self.page_size = page_size or settings.sync_page_size
        self.repository = StravaActivityRepository(db)
        self.page_sync = ActivitySyncService(db, self.client)

    # -------------------------------------------------------------------------
    # Cache
    # -------------------------------------------------------------------------

    async def load_cached(self, athlete_id: str) -> list[Activity]:
        """
        Read the athlete's stored runs.

        Returns:
            Runs newest first; empty list when nothing is stored

        Raises:
            ActivityStoreError: If the store cannot be read
        """
        rows = await self.repository.read_all(athlete_id, activity_type=SyncConfig.ACTIVITY_TYPE)
        return [Activity.from_model(row) for row in rows]

    # -------------------------------------------------------------------------
    # Live sync
    # -------------------------------------------------------------------------

    def _expire(self, session: AthleteSession, error: Exception) -> SessionExpiredError:
        logger.warning(
            f"Strava failure for athlete {session.athlete_id} "
            f"({type(error).__name__}: {error}); ending session"
        )
        self.sessions.end(session.session_id)
        session.invalidate()
        return SessionExpiredError(
            f"Strava request failed ({type(error).__name__}); re-authorization required",
            athlete_id=session.athlete_id
        )

    async def sync_all(
        self,
        session: AthleteSession,
        start_page: int = SyncConfig.FIRST_PAGE,
        per_page: Optional[int] = None
    ) -> SyncResult:
        """
        Page through the athlete's Strava history and upsert every run.

        Args:
            session: Active athlete session (holds the bearer token)
            start_page: Page to start from (resume after a store failure)
            per_page: Page size, defaults to settings.sync_page_size

        Returns:
            SyncResult with totals and the runs seen (newest first)

        Raises:
            SessionExpiredError: On any Strava failure (session ended)
            ActivityStoreError: If a page could not be persisted; its
                `page` attribute tells where to resume
        """
        if not session.is_active:
            raise SessionExpiredError("Session has no credential", athlete_id=session.athlete_id)

        per_page = per_page or self.page_size
        result = SyncResult()
        seen: dict[int, Activity] = {}
        page = start_page

        while True:
            if result.pages >= SyncConfig.MAX_PAGES:
                logger.warning(
                    f"Stopped sync for athlete {session.athlete_id} "
                    f"after {result.pages} pages"
                )
                result.truncated = True
                break

            try:
                page_result = await self.page_sync.sync_page(
                    session.athlete_id,
                    session.access_token,
                    page,
                    per_page=per_page,
                    athlete_name=session.athlete_name
                )
            except StravaError as e:
                raise self._expire(session, e) from e

            result.pages += 1
            result.fetched += page_result.fetched
            result.runs += page_result.runs
            for activity in page_result.activities:
                seen[activity.external_id] = activity

            if not page_result.is_full(per_page):
                break
            page += 1

        result.activities = newest_first(list(seen.values()))
        logger.info(
            f"Sync finished for athlete {session.athlete_id}: "
            f"pages={result.pages} fetched={result.fetched} runs={result.runs}"
        )
        return result

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    async def load_activities(self, session: AthleteSession) -> LoadResult:
        """
        Cache-first load for a session.

        Falls back to a live sync from page 1 when the partition is empty
        or the store cannot be read.
        """
        try:
            cached = await self.load_cached(session.athlete_id)
        except ActivityStoreError as e:
            logger.warning(
                f"Store read failed for athlete {session.athlete_id}, "
                f"falling back to Strava: {e}"
            )
            await self.db.rollback()
            cached = []

        if cached:
            logger.info(f"Cache hit for athlete {session.athlete_id}: {len(cached)} runs")
            return LoadResult(activities=cached, source="cache")

        logger.info(f"Cache miss for athlete {session.athlete_id}, syncing from Strava")
        result = await self.sync_all(session)
        return LoadResult(activities=result.activities, source="strava", sync=result)

    async def refresh(
        self,
        session: AthleteSession,
        start_page: int = SyncConfig.FIRST_PAGE
    ) -> SyncResult:
        """Re-sync regardless of the cache, picking up edited activities."""
        return await self.sync_all(session, start_page=start_page)
