"""
API v1 package.

Combines the account and intake routers; mounted under /api.
"""

from fastapi import APIRouter

from src.api.v1.auth import router as auth_router
from src.api.v1.intake import router as intake_router

router = APIRouter()
router.include_router(auth_router)
router.include_router(intake_router)

__all__ = ["router"]
