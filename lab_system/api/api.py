"""
API router aggregation.

All endpoint routers are mounted here; ``main.py`` mounts this router at
``settings.API_PREFIX``.
"""

from fastapi import APIRouter

from lab_system.api.endpoints import index, users

api_router = APIRouter()

api_router.include_router(index.router)
api_router.include_router(users.router, prefix="/users", tags=["Users"])
