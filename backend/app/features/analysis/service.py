"""
Comparison service.

Combines matching and statistics for one preset.
"""

import logging
from typing import Sequence

from app.features.strava.activity import Activity
from .matching import match
from .models import Comparison, DistancePreset
from .stats import summarize

logger = logging.getLogger(__name__)


class ComparisonService:
    """
    Compare an athlete's runs around a target distance.

    Usage:
        service = ComparisonService()
        comparison = service.compare(activities, get_preset("10k"))
    """

    def compare(
        self,
        activities: Sequence[Activity],
        preset: DistancePreset
    ) -> Comparison:
        """Match runs to the preset band and summarize them."""
        matches = match(activities, preset)
        summary = summarize(matches)

        logger.debug(
            f"Compared {len(activities)} runs against {preset.label}: "
            f"{len(matches)} matched"
        )
        return Comparison(preset=preset, matches=matches, summary=summary)
