"""
Strava-related database models.

Models:
- StravaActivity: Synced run summary, partitioned per athlete
"""

from datetime import datetime

from sqlalchemy import (
    Column, String, DateTime, Integer, Float, BigInteger, UniqueConstraint, Index,
)

from app.models.base import Base


class StravaActivity(Base):
    """
    Strava activity summary.

    Stores only the raw summary fields. Pace and other derived metrics
    are recomputed on read, never persisted.

    Each athlete owns a partition (athlete_id); strava_id is unique
    within a partition, not across the table.
    """

    __tablename__ = "strava_activities"
    __table_args__ = (
        UniqueConstraint("athlete_id", "strava_id", name="uq_strava_activities_athlete_strava"),
        Index("ix_strava_activities_athlete_start", "athlete_id", "start_date"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Partition key: Strava athlete ID
    athlete_id = Column(String(20), nullable=False, index=True)
    athlete_name = Column(String(255), nullable=True)

    # Strava identifiers
    strava_id = Column(BigInteger, nullable=False)  # Strava activity ID

    # Activity info
    name = Column(String(255), nullable=True)
    activity_type = Column(String(50), nullable=False)  # Run, Ride, Walk, etc.
    start_date = Column(DateTime, nullable=False)

    # Core metrics
    distance_m = Column(Float, nullable=False, default=0.0)
    moving_time_s = Column(Integer, nullable=False, default=0)

    # Heart rate (if recorded)
    avg_heartrate = Column(Float, nullable=True)

    # Bookkeeping: created_at only on first insert, updated_at on every write
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self):
        return (
            f"<StravaActivity {self.strava_id} athlete={self.athlete_id} "
            f"{self.activity_type} {self.distance_m}m>"
        )
