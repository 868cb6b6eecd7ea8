"""
Strava schemas.

Pydantic schemas for API request/response serialization.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from app.shared.formatters import format_duration, format_pace
from .activity import Activity


class CodeExchangeRequest(BaseModel):
    """Authorization code returned by Strava's redirect."""
    code: str = Field(..., min_length=1)


class SessionResponse(BaseModel):
    """Session created after a successful code exchange."""
    session_id: str
    athlete_id: str
    athlete_name: str


class AuthorizationUrlResponse(BaseModel):
    url: str


class ActivityResponse(BaseModel):
    """Single run as plain data."""
    external_id: int
    name: str
    distance_km: float
    moving_time_s: int
    moving_time: str
    pace_sec_per_km: Optional[float] = None
    pace: str
    average_heartrate: Optional[float] = None
    start_date: datetime

    @classmethod
    def from_activity(cls, activity: Activity) -> "ActivityResponse":
        pace = activity.pace_sec_per_km
        return cls(
            external_id=activity.external_id,
            name=activity.name,
            distance_km=round(activity.distance_km, 3),
            moving_time_s=activity.moving_time_s,
            moving_time=format_duration(activity.moving_time_s),
            pace_sec_per_km=round(pace, 1) if pace is not None else None,
            pace=format_pace(pace),
            average_heartrate=activity.average_heartrate,
            start_date=activity.start_date,
        )


class ActivitiesResponse(BaseModel):
    """Runs for the session's athlete."""
    athlete_id: str
    source: str = Field(..., description="'cache' or 'strava'")
    total: int
    activities: List[ActivityResponse] = []


class SyncResponse(BaseModel):
    """Outcome of a forced sync pass."""
    athlete_id: str
    pages: int
    fetched: int
    runs: int
    truncated: bool = False
