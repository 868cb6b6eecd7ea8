"""
Strava repositories.

Data access layer for the per-athlete activity store.
"""

from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy import select, desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.constants import SYNCED_ACTIVITY_TYPE
from app.shared.repository import BaseRepository
from .activity import Activity
from .models import StravaActivity


class ActivityStoreError(Exception):
    """Activity store unreachable or a write failed."""

    def __init__(self, message: str, athlete_id: str | None = None, page: int | None = None):
        super().__init__(message)
        self.athlete_id = athlete_id
        self.page = page


class StravaActivityRepository(BaseRepository[StravaActivity]):
    """
    Repository for Strava activities.

    Every query is scoped to one athlete partition. Writes are upserts keyed
    by (athlete_id, strava_id).
    """

    def __init__(self, db: AsyncSession):
        super().__init__(db, StravaActivity)

    async def get_by_strava_id(
        self,
        athlete_id: str,
        strava_id: int
    ) -> StravaActivity | None:
        """
        Get one activity from an athlete's partition.

        Args:
            athlete_id: Partition key
            strava_id: Strava's activity ID

        Returns:
            StravaActivity if found, None otherwise
        """
        try:
            return await self.get_by(athlete_id=athlete_id, strava_id=strava_id)
        except SQLAlchemyError as e:
            raise ActivityStoreError(f"Store read failed: {e}", athlete_id=athlete_id) from e

    async def upsert_many(
        self,
        athlete_id: str,
        activities: Iterable[Activity],
        athlete_name: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> int:
        """
        Insert or update activities in an athlete's partition.

        Duplicates within the batch collapse to their last occurrence.
        created_at is written only for new rows; updated_at on every row.
        Flushes but does not commit.

        Args:
            athlete_id: Partition key
            activities: Activities to write
            athlete_name: Display name stored alongside each row
            now: Write timestamp (defaults to utcnow)

        Returns:
            Number of distinct activities written

        Raises:
            ActivityStoreError: If the store rejects the batch
        """
        latest = {a.external_id: a for a in activities}
        if not latest:
            return 0

        now = now or datetime.utcnow()

        try:
            result = await self.db.execute(
                select(StravaActivity)
                .where(StravaActivity.athlete_id == athlete_id)
                .where(StravaActivity.strava_id.in_(list(latest)))
            )
            existing = {row.strava_id: row for row in result.scalars().all()}

            for strava_id, activity in latest.items():
                row = existing.get(strava_id)
                if row is None:
                    row = StravaActivity(
                        athlete_id=athlete_id,
                        strava_id=strava_id,
                        created_at=now,
                    )
                    self.db.add(row)

                row.name = activity.name
                row.activity_type = activity.activity_type
                row.start_date = activity.start_date
                row.distance_m = activity.distance_m
                row.moving_time_s = activity.moving_time_s
                row.avg_heartrate = activity.average_heartrate
                if athlete_name is not None:
                    row.athlete_name = athlete_name
                row.updated_at = now

            await self.db.flush()
        except SQLAlchemyError as e:
            raise ActivityStoreError(f"Store write failed: {e}", athlete_id=athlete_id) from e

        return len(latest)

    async def read_all(
        self,
        athlete_id: str,
        activity_type: str | None = SYNCED_ACTIVITY_TYPE
    ) -> list[StravaActivity]:
        """
        Read an athlete's whole partition.

        Args:
            athlete_id: Partition key
            activity_type: Type filter ("Run" by default, None for all)

        Returns:
            Activities ordered by start date (newest first); empty list
            when the partition has no rows
        """
        query = (
            select(StravaActivity)
            .where(StravaActivity.athlete_id == athlete_id)
            .order_by(desc(StravaActivity.start_date), desc(StravaActivity.strava_id))
        )
        if activity_type:
            query = query.where(StravaActivity.activity_type == activity_type)

        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise ActivityStoreError(f"Store read failed: {e}", athlete_id=athlete_id) from e
        return list(result.scalars().all())

    async def count_for_athlete(
        self,
        athlete_id: str,
        activity_type: str | None = SYNCED_ACTIVITY_TYPE
    ) -> int:
        """Count activities in an athlete's partition."""
        filters = {"athlete_id": athlete_id}
        if activity_type:
            filters["activity_type"] = activity_type
        try:
            return await self.count(**filters)
        except SQLAlchemyError as e:
            raise ActivityStoreError(f"Store read failed: {e}", athlete_id=athlete_id) from e
