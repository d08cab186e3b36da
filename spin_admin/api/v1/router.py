"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from spin_admin.api.v1.dependencies.
"""

from fastapi import APIRouter

from spin_admin.api.v1.endpoints import admin_claims, dashboard, feeds, health, spins

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(spins.router, prefix="/spins", tags=["spins"])
api_router.include_router(admin_claims.router, prefix="/admin", tags=["admin"])
api_router.include_router(dashboard.router, tags=["dashboard"])
api_router.include_router(feeds.router, prefix="/feeds", tags=["feeds"])
