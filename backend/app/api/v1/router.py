"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from app.api.v1.routes import auth, activities, analysis

api_router = APIRouter()

api_router.include_router(auth.router, tags=["Auth"])
api_router.include_router(activities.router)
api_router.include_router(analysis.router)
