"""
Athlete session context.

Usage:
    from app.features.session import AthleteSession, session_store
"""

from .models import AthleteSession
from .store import SessionStore, session_store

__all__ = [
    "AthleteSession",
    "SessionStore",
    "session_store",
]
