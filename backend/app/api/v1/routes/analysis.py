"""
Comparison routes.

Endpoints:
- GET /presets           - Fixed distance presets
- GET /analysis/compare  - Matched runs and summary for a preset or custom distance
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.deps import get_current_session, get_synchronizer
from app.api.v1.routes.activities import load_for_session
from app.features.analysis import (
    PRESETS,
    ComparisonService,
    InvalidDistanceError,
    resolve_preset,
)
from app.features.analysis.schemas import ComparisonResponse, PresetResponse
from app.features.session import AthleteSession
from app.features.strava.sync import ActivitySynchronizer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Analysis"])


@router.get("/presets", response_model=list[PresetResponse])
async def list_presets():
    """Fixed presets with their tolerance bands."""
    return [PresetResponse.from_preset(preset, key=key) for key, preset in PRESETS.items()]


@router.get("/analysis/compare", response_model=ComparisonResponse)
async def compare(
    preset: Optional[str] = Query(default=None, description="Preset key, e.g. 10k"),
    distance_km: Optional[float] = Query(default=None, description="Custom target distance"),
    session: AthleteSession = Depends(get_current_session),
    sync: ActivitySynchronizer = Depends(get_synchronizer),
):
    """
    Compare runs around a target distance.

    A custom distance_km takes precedence over preset.
    """
    # Validate before touching the store or Strava
    try:
        target = resolve_preset(key=preset, custom_km=distance_km)
    except InvalidDistanceError as e:
        raise HTTPException(status_code=422, detail=str(e))

    result = await load_for_session(session, sync)
    comparison = ComparisonService().compare(result.activities, target)

    return ComparisonResponse.from_comparison(
        comparison,
        source=result.source,
        key=preset if distance_km is None else None,
    )
