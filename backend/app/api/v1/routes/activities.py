"""
Activity routes.

Endpoints:
- GET  /activities       - Runs for the session (store first, Strava on miss)
- POST /activities/sync  - Force a sync pass against Strava
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.deps import get_current_session, get_synchronizer
from app.features.session import AthleteSession
from app.features.strava import ActivityStoreError
from app.features.strava.schemas import ActivitiesResponse, ActivityResponse, SyncResponse
from app.features.strava.sync import ActivitySynchronizer, LoadResult, SessionExpiredError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/activities", tags=["Activities"])


def _session_expired(e: SessionExpiredError) -> HTTPException:
    return HTTPException(status_code=401, detail=str(e))


def _store_unavailable(e: ActivityStoreError) -> HTTPException:
    detail = {"message": "Activity store unavailable, retry later"}
    if e.page is not None:
        detail["retry_from_page"] = e.page
    return HTTPException(status_code=503, detail=detail)


async def load_for_session(
    session: AthleteSession,
    sync: ActivitySynchronizer
) -> LoadResult:
    """Cache-or-sync load with errors mapped to HTTP responses."""
    try:
        return await sync.load_activities(session)
    except SessionExpiredError as e:
        raise _session_expired(e)
    except ActivityStoreError as e:
        logger.error(f"Store failure while loading athlete {session.athlete_id}: {e}")
        raise _store_unavailable(e)


@router.get("", response_model=ActivitiesResponse)
async def list_activities(
    session: AthleteSession = Depends(get_current_session),
    sync: ActivitySynchronizer = Depends(get_synchronizer),
):
    """All runs for the session's athlete, newest first."""
    result = await load_for_session(session, sync)
    return ActivitiesResponse(
        athlete_id=session.athlete_id,
        source=result.source,
        total=len(result.activities),
        activities=[ActivityResponse.from_activity(a) for a in result.activities],
    )


@router.post("/sync", response_model=SyncResponse)
async def sync_activities(
    start_page: int = Query(default=1, ge=1, description="Resume from this page"),
    session: AthleteSession = Depends(get_current_session),
    sync: ActivitySynchronizer = Depends(get_synchronizer),
):
    """Re-fetch the athlete's history and upsert every run."""
    try:
        result = await sync.refresh(session, start_page=start_page)
    except SessionExpiredError as e:
        raise _session_expired(e)
    except ActivityStoreError as e:
        logger.error(f"Store failure while syncing athlete {session.athlete_id}: {e}")
        raise _store_unavailable(e)

    return SyncResponse(
        athlete_id=session.athlete_id,
        pages=result.pages,
        fetched=result.fetched,
        runs=result.runs,
        truncated=result.truncated,
    )
