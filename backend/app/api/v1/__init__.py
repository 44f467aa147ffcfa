"""Versioned API router."""

from fastapi import APIRouter

from . import auth, engines, health, vehicles

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(engines.router, prefix="/engines", tags=["engines"])
router.include_router(vehicles.cars_router, prefix="/cars", tags=["cars"])
router.include_router(
    vehicles.motorcycles_router, prefix="/motorcycles", tags=["motorcycles"]
)

__all__ = ["router"]
