"""
Base repository with common query helpers.

Provides generic database operations for feature repositories.
Uses SQLAlchemy async session for non-blocking database access.

Repositories flush but never commit: the calling service owns the
transaction, so a batch of writes either lands together or not at all.

Usage:
    class StravaActivityRepository(BaseRepository[StravaActivity]):
        def __init__(self, db: AsyncSession):
            super().__init__(db, StravaActivity)

        async def get_by_strava_id(self, athlete_id, strava_id):
            return await self.get_by(athlete_id=athlete_id, strava_id=strava_id)
"""

from typing import TypeVar, Generic, Type
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base repository for database operations.

    All methods are async for use with AsyncSession.
    """

    def __init__(self, db: AsyncSession, model: Type[T]):
        """
        Initialize repository.

        Args:
            db: Async database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    def _filtered(self, query, **kwargs):
        for key, value in kwargs.items():
            query = query.where(getattr(self.model, key) == value)
        return query

    async def get_by(self, **kwargs) -> T | None:
        """
        Get single entity by arbitrary field values.

        Args:
            **kwargs: Field name-value pairs to filter by

        Returns:
            Matching entity or None
        """
        result = await self.db.execute(self._filtered(select(self.model), **kwargs))
        return result.scalar_one_or_none()

    async def count(self, **kwargs) -> int:
        """
        Count entities matching criteria.

        Args:
            **kwargs: Field name-value pairs to filter by

        Returns:
            Number of matching entities
        """
        query = self._filtered(select(func.count()).select_from(self.model), **kwargs)
        result = await self.db.execute(query)
        return result.scalar() or 0
