"""
Activity page synchronization.

Fetches one page from the Strava API, keeps the runs and upserts them
into the athlete's partition as a single transaction.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..activity import Activity
from ..client import StravaClient
from ..repository import ActivityStoreError, StravaActivityRepository
from .config import SyncConfig

logger = logging.getLogger(__name__)


@dataclass
class PageResult:
    """Outcome of one synced page."""

    page: int
    fetched: int  # items Strava returned, all types
    runs: int  # items kept and upserted
    activities: list[Activity] = field(default_factory=list)

    def is_full(self, per_page: int) -> bool:
        """A full page means more data may follow."""
        return self.fetched >= per_page


class ActivitySyncService:
    """
    Service for syncing one page of activities from Strava.

    Handles:
    - Fetching a page of the activity list
    - Filtering to runs
    - Upserting the page as one unit (commit on success, rollback on failure)
    """

    def __init__(self, db: AsyncSession, client: Optional[StravaClient] = None):
        self.db = db
        self.client = client or StravaClient()
        self.repository = StravaActivityRepository(db)

    @staticmethod
    def filter_runs(items: list[dict]) -> list[Activity]:
        """Keep Run summaries, in the order Strava returned them."""
        return [
            Activity.from_strava(item)
            for item in items
            if item.get("type") == SyncConfig.ACTIVITY_TYPE
        ]

    async def sync_page(
        self,
        athlete_id: str,
        access_token: str,
        page: int,
        per_page: int = SyncConfig.ACTIVITIES_PER_PAGE,
        athlete_name: Optional[str] = None
    ) -> PageResult:
        """
        Fetch, filter and persist one page.

        The page is committed as a whole. On store failure it is rolled
        back, earlier pages stay intact and the caller may retry this page
        (upsert makes the retry safe).

        Args:
            athlete_id: Partition key
            access_token: Bearer token from the athlete's session
            page: 1-based page number
            per_page: Requested page size
            athlete_name: Stored alongside each run

        Returns:
            PageResult with fetched and run counts

        Raises:
            StravaError: Any failure talking to Strava (nothing written)
            ActivityStoreError: If the page could not be persisted
        """
        items = await self.client.get_activities(
            access_token,
            page=page,
            per_page=per_page,
            rate_limit_key=athlete_id
        )
        runs = self.filter_runs(items)

        if runs:
            try:
                await self.repository.upsert_many(athlete_id, runs, athlete_name=athlete_name)
                await self.db.commit()
            except (ActivityStoreError, SQLAlchemyError) as e:
                await self.db.rollback()
                logger.error(f"Page {page} write failed for athlete {athlete_id}: {e}")
                raise ActivityStoreError(
                    f"Failed to persist page {page}: {e}",
                    athlete_id=athlete_id,
                    page=page
                ) from e

        logger.info(
            f"Synced page {page} for athlete {athlete_id}: "
            f"fetched={len(items)} runs={len(runs)}"
        )
        return PageResult(page=page, fetched=len(items), runs=len(runs), activities=runs)
