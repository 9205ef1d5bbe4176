"""Versioned API router."""

from fastapi import APIRouter

from . import auth, health, orders, rentals

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(orders.router, prefix="/orders", tags=["orders"])
router.include_router(rentals.router, tags=["rentals"])

__all__ = ["router"]
