"""
Strava sync services.

Provides:
- ActivitySynchronizer: Cache-or-sync orchestrator
- ActivitySyncService: One-page fetch, filter and upsert
"""

from .service import (
    ActivitySynchronizer,
    SessionExpiredError,
    SyncResult,
    LoadResult,
)
from .activities import ActivitySyncService, PageResult
from .config import SyncConfig

__all__ = [
    # Services
    "ActivitySynchronizer",
    "ActivitySyncService",
    # Results
    "SyncResult",
    "LoadResult",
    "PageResult",
    # Errors
    "SessionExpiredError",
    # Config
    "SyncConfig",
]
