"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from app.api.v1.routes import routes, elevation

api_router = APIRouter()

api_router.include_router(routes.router, prefix="/routes", tags=["Routes"])
api_router.include_router(elevation.router, prefix="/admin/elevation", tags=["Elevation"])
