"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import activity_logs, admin, auth, grants, health, identity, menus, profiles

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(identity.router, prefix="/identity", tags=["identity"])
router.include_router(auth.router, prefix="/me", tags=["me"])
router.include_router(profiles.router, prefix="/profiles", tags=["profiles"])
router.include_router(menus.router, prefix="/menus", tags=["menus"])
router.include_router(grants.router, prefix="/grants", tags=["grants"])
router.include_router(activity_logs.router, prefix="/activity-logs", tags=["activity-logs"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
