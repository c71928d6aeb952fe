from __future__ import annotations

from fastapi import APIRouter

from app.api.auth_api import router as auth_router
from app.api.meta_api import router as meta_router

router = APIRouter()

# Include sub-routers
router.include_router(meta_router, tags=["meta"])
router.include_router(auth_router, tags=["auth"])
