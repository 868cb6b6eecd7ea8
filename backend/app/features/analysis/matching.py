"""Distance matching: comparable efforts for a target distance."""

from __future__ import annotations

from typing import Sequence

from app.features.strava.activity import Activity
from app.shared.constants import BAND_PRECISION
from .models import DistancePreset


def band_bounds(preset: DistancePreset) -> tuple[float, float]:
    """Inclusive (low_km, high_km) band for a preset.

    Bounds are rounded to BAND_PRECISION decimals so float error in
    target +/- tolerance cannot pull an edge inward (5.1 + 0.51 is
    5.609999999999999 in raw float).
    """
    return (
        round(preset.target_km - preset.tolerance_km, BAND_PRECISION),
        round(preset.target_km + preset.tolerance_km, BAND_PRECISION),
    )


def in_band(activity: Activity, preset: DistancePreset) -> bool:
    """True if the activity's distance lies inside the preset band."""
    if activity.distance_m <= 0:
        return False  # pace undefined
    low, high = band_bounds(preset)
    return low <= round(activity.distance_km, BAND_PRECISION) <= high


def match(
    activities: Sequence[Activity] | None,
    preset: DistancePreset | None,
) -> list[Activity]:
    """Select runs inside the preset band, fastest pace first.

    The sort is stable, so equal paces keep their input order.
    Empty input or no preset gives an empty list.
    """
    if not activities or preset is None:
        return []

    matched = [a for a in activities if in_band(a, preset)]
    return sorted(matched, key=lambda a: a.pace_sec_per_km)
