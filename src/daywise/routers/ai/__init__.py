from __future__ import annotations

from fastapi import APIRouter

from .routes import chat, recommendations, status, suggestions

router = APIRouter(prefix="/ai", tags=["ai"])

router.include_router(suggestions.router)
router.include_router(status.router)
router.include_router(recommendations.router)
router.include_router(chat.router)

__all__ = ["router"]
