"""Data models for distance comparison (dataclasses, no DB dependency)."""

from __future__ import annotations

from dataclasses import dataclass, field

from app.features.strava.activity import Activity


@dataclass(frozen=True)
class DistancePreset:
    """Target distance with an inclusive tolerance band."""

    label: str  # "10K"
    target_km: float  # 10.0
    tolerance_km: float  # 1.0 -> band [9.0, 11.0]


@dataclass
class PerformanceSummary:
    """Aggregate statistics over a matched set. Never persisted."""

    total_runs: int
    avg_pace_sec_per_km: float
    avg_heart_rate: float | None  # None when no run recorded heart rate
    best_time_seconds: int  # moving time of the fastest-pace run
    pace_improvement_percent: float | None  # None below the trend threshold


@dataclass
class Comparison:
    """Matched runs for a preset plus their summary."""

    preset: DistancePreset
    matches: list[Activity] = field(default_factory=list)  # fastest pace first
    summary: PerformanceSummary | None = None
