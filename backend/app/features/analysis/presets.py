"""Distance presets: fixed race distances and validated custom targets."""

from __future__ import annotations

import math

from app.shared.constants import MIN_TOLERANCE_KM, TOLERANCE_RATIO
from .models import DistancePreset


class InvalidDistanceError(ValueError):
    """Custom target distance is zero, negative or not a number."""
    pass


def tolerance_for(target_km: float) -> float:
    """Band half-width: 10% of the target, never below 0.5 km."""
    return max(MIN_TOLERANCE_KM, target_km * TOLERANCE_RATIO)


PRESETS: dict[str, DistancePreset] = {
    "5k": DistancePreset(label="5K", target_km=5.0, tolerance_km=0.5),
    "10k": DistancePreset(label="10K", target_km=10.0, tolerance_km=1.0),
    "half": DistancePreset(label="Half Marathon", target_km=21.0975, tolerance_km=2.1),
    "marathon": DistancePreset(label="Marathon", target_km=42.195, tolerance_km=4.2),
}


def get_preset(key: str) -> DistancePreset | None:
    """Look up a fixed preset by slug (case-insensitive)."""
    return PRESETS.get(key.strip().lower())


def custom_preset(target_km: float, label: str | None = None) -> DistancePreset:
    """
    Build a preset from a user-entered distance.

    Raises:
        InvalidDistanceError: If target_km is not a positive finite number
    """
    try:
        target = float(target_km)
    except (TypeError, ValueError) as e:
        raise InvalidDistanceError(f"Distance must be a number, got {target_km!r}") from e

    if not math.isfinite(target) or target <= 0:
        raise InvalidDistanceError(f"Distance must be positive, got {target_km!r}")

    return DistancePreset(
        label=label or f"{target:g} km",
        target_km=target,
        tolerance_km=tolerance_for(target),
    )


def resolve_preset(key: str | None = None, custom_km: float | None = None) -> DistancePreset:
    """
    Pick a preset for a request: a custom distance wins over a slug.

    Raises:
        InvalidDistanceError: Unknown slug, bad custom distance, or neither given
    """
    if custom_km is not None:
        return custom_preset(custom_km)
    if key:
        preset = get_preset(key)
        if preset is None:
            raise InvalidDistanceError(
                f"Unknown preset {key!r}; expected one of {', '.join(PRESETS)}"
            )
        return preset
    raise InvalidDistanceError("Provide a preset or a custom distance")
