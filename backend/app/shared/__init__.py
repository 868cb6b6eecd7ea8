"""
Shared utilities (NOT business logic).

Usage:
    from app.shared import format_pace, SYNCED_ACTIVITY_TYPE
    from app.shared.repository import BaseRepository
"""
from .formatters import (
    format_duration,
    format_pace,
)
from .constants import (
    SYNCED_ACTIVITY_TYPE,
    METERS_PER_KM,
)

__all__ = [
    "format_duration",
    "format_pace",
    "SYNCED_ACTIVITY_TYPE",
    "METERS_PER_KM",
]
