"""Activity value type (dataclass, no DB dependency).

The in-memory shape shared by the synchronizer, the matcher and the
analyzer. Built either from a Strava API summary or from a stored row.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from app.shared.constants import METERS_PER_KM, SYNCED_ACTIVITY_TYPE


def parse_strava_datetime(value: str | datetime) -> datetime:
    """Parse Strava's ISO timestamp ("2024-05-01T07:00:00Z") to naive UTC."""
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _optional_heart_rate(value: Any) -> Optional[float]:
    """Heart rate is optional; zero or negative readings count as absent."""
    if value is None:
        return None
    hr = float(value)
    return hr if hr > 0 else None


@dataclass(frozen=True)
class Activity:
    """Single activity summary."""

    external_id: int  # Strava activity ID
    name: str
    distance_m: float
    moving_time_s: int
    average_heartrate: Optional[float]
    activity_type: str  # "Run", "Ride", ...
    start_date: datetime  # naive UTC
    created_at: Optional[datetime] = None  # set by the store
    updated_at: Optional[datetime] = None  # set by the store

    @property
    def distance_km(self) -> float:
        return self.distance_m / METERS_PER_KM

    @property
    def pace_sec_per_km(self) -> Optional[float]:
        """Seconds per kilometer; None when distance is zero."""
        if self.distance_m <= 0:
            return None
        return self.moving_time_s / self.distance_km

    @property
    def is_run(self) -> bool:
        return self.activity_type == SYNCED_ACTIVITY_TYPE

    @property
    def has_heart_rate(self) -> bool:
        return self.average_heartrate is not None

    @classmethod
    def from_strava(cls, data: dict) -> "Activity":
        """Build from a /athlete/activities list item."""
        return cls(
            external_id=int(data["id"]),
            name=data.get("name") or "",
            distance_m=max(float(data.get("distance") or 0.0), 0.0),
            moving_time_s=max(int(data.get("moving_time") or 0), 0),
            average_heartrate=_optional_heart_rate(data.get("average_heartrate")),
            activity_type=data.get("type", "Unknown"),
            start_date=parse_strava_datetime(data["start_date"]),
        )

    @classmethod
    def from_model(cls, row: Any) -> "Activity":
        """Build from a StravaActivity row."""
        return cls(
            external_id=int(row.strava_id),
            name=row.name or "",
            distance_m=float(row.distance_m or 0.0),
            moving_time_s=int(row.moving_time_s or 0),
            average_heartrate=_optional_heart_rate(row.avg_heartrate),
            activity_type=row.activity_type,
            start_date=row.start_date,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
