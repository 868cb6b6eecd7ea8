"""
Database Models

Feature models live next to their feature (app.features.<name>.models)
and register themselves on this Base when imported.
"""

from app.models.base import Base

__all__ = ["Base"]
