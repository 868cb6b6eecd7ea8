"""
Comparison schemas.

Pydantic schemas for API request/response serialization.
"""

from typing import List, Optional

from pydantic import BaseModel

from app.features.strava.schemas import ActivityResponse
from app.shared.formatters import format_duration, format_pace
from .matching import band_bounds
from .models import Comparison, DistancePreset, PerformanceSummary


class PresetResponse(BaseModel):
    key: Optional[str] = None
    label: str
    target_km: float
    tolerance_km: float
    min_km: float
    max_km: float

    @classmethod
    def from_preset(cls, preset: DistancePreset, key: Optional[str] = None) -> "PresetResponse":
        low, high = band_bounds(preset)
        return cls(
            key=key,
            label=preset.label,
            target_km=preset.target_km,
            tolerance_km=round(preset.tolerance_km, 4),
            min_km=round(low, 4),
            max_km=round(high, 4),
        )


class SummaryResponse(BaseModel):
    total_runs: int
    avg_pace_sec_per_km: float
    avg_pace: str
    avg_heart_rate: Optional[float] = None
    best_time_seconds: int
    best_time: str
    pace_improvement_percent: Optional[float] = None

    @classmethod
    def from_summary(cls, summary: PerformanceSummary) -> "SummaryResponse":
        improvement = summary.pace_improvement_percent
        return cls(
            total_runs=summary.total_runs,
            avg_pace_sec_per_km=round(summary.avg_pace_sec_per_km, 1),
            avg_pace=format_pace(summary.avg_pace_sec_per_km),
            avg_heart_rate=(
                round(summary.avg_heart_rate, 1) if summary.avg_heart_rate is not None else None
            ),
            best_time_seconds=summary.best_time_seconds,
            best_time=format_duration(summary.best_time_seconds),
            pace_improvement_percent=round(improvement, 2) if improvement is not None else None,
        )


class ComparisonResponse(BaseModel):
    preset: PresetResponse
    source: str
    matches: List[ActivityResponse] = []
    summary: Optional[SummaryResponse] = None

    @classmethod
    def from_comparison(
        cls,
        comparison: Comparison,
        source: str,
        key: Optional[str] = None
    ) -> "ComparisonResponse":
        return cls(
            preset=PresetResponse.from_preset(comparison.preset, key=key),
            source=source,
            matches=[ActivityResponse.from_activity(a) for a in comparison.matches],
            summary=(
                SummaryResponse.from_summary(comparison.summary)
                if comparison.summary is not None else None
            ),
        )
