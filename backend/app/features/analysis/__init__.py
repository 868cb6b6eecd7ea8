"""
Run comparison across similar distances.

Usage:
    from app.features.analysis import match, summarize, get_preset

Components:
- presets: fixed and custom DistancePreset values
- matching: tolerance-band selection, fastest pace first
- stats: PerformanceSummary (average pace/HR, best time, pace trend)
- ComparisonService: match + summarize in one call
"""

from .models import DistancePreset, PerformanceSummary, Comparison
from .presets import (
    PRESETS,
    InvalidDistanceError,
    get_preset,
    custom_preset,
    resolve_preset,
    tolerance_for,
)
from .matching import match, band_bounds, in_band
from .stats import summarize, chronological, pace_improvement
from .service import ComparisonService

__all__ = [
    # Models
    "DistancePreset",
    "PerformanceSummary",
    "Comparison",
    # Presets
    "PRESETS",
    "InvalidDistanceError",
    "get_preset",
    "custom_preset",
    "resolve_preset",
    "tolerance_for",
    # Matching
    "match",
    "band_bounds",
    "in_band",
    # Stats
    "summarize",
    "chronological",
    "pace_improvement",
    # Service
    "ComparisonService",
]
