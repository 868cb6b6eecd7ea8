"""Performance statistics over a matched set of runs."""

from __future__ import annotations

from statistics import fmean
from typing import Sequence

from app.features.strava.activity import Activity
from app.shared.constants import MIN_RUNS_FOR_TREND, TREND_WINDOW
from .models import PerformanceSummary


def chronological(activities: Sequence[Activity]) -> list[Activity]:
    """Oldest first. Stable, so same-start runs keep their input order."""
    return sorted(activities, key=lambda a: a.start_date)


def pace_improvement(activities: Sequence[Activity]) -> float | None:
    """Percent change from the earliest runs' mean pace to the latest runs'.

    Positive means faster. None when fewer than MIN_RUNS_FOR_TREND runs
    have a defined pace.
    """
    timed = [a for a in activities if a.pace_sec_per_km is not None]
    if len(timed) < MIN_RUNS_FOR_TREND:
        return None

    ordered = chronological(timed)
    early = fmean(a.pace_sec_per_km for a in ordered[:TREND_WINDOW])
    recent = fmean(a.pace_sec_per_km for a in ordered[-TREND_WINDOW:])
    if early == 0:
        return None
    return (early - recent) / early * 100


def summarize(ordered_activities: Sequence[Activity]) -> PerformanceSummary | None:
    """Summarize a matched set.

    Args:
        ordered_activities: Output of match(), fastest pace first.

    Returns:
        PerformanceSummary, or None when no run has a defined pace.

    best_time_seconds is the moving time of the first (fastest-pace) run,
    which can differ from the shortest moving time when distances vary
    within the band. Zero-distance runs have no pace and are skipped,
    as in_band() does.
    """
    timed = [a for a in ordered_activities or () if a.pace_sec_per_km is not None]
    if not timed:
        return None

    heart_rates = [a.average_heartrate for a in timed if a.has_heart_rate]

    return PerformanceSummary(
        total_runs=len(timed),
        avg_pace_sec_per_km=fmean(a.pace_sec_per_km for a in timed),
        avg_heart_rate=fmean(heart_rates) if heart_rates else None,
        best_time_seconds=timed[0].moving_time_s,
        pace_improvement_percent=pace_improvement(timed),
    )
