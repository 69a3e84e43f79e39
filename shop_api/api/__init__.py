"""API routes, mounted under /api. The bare /api index lives in api.index."""

from fastapi import APIRouter, Depends

from shop_api.api import admin, auth, health, users
from shop_api.core.access import get_current_user

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(
    admin.router,
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(get_current_user)],
)
