"""FastAPI API endpoints under /api.

Endpoint groups: health + narrator settings, tale flow (begin, end, undo,
choice, free-text act), character editing, session save/load. Every
mutating endpoint returns the full session view (see backend.deps).
"""

from fastapi import APIRouter

from .characters import router as characters_router
from .session import router as session_router
from .settings import router as settings_router
from .tale import router as tale_router

router = APIRouter()
router.include_router(settings_router)
router.include_router(tale_router)
router.include_router(characters_router)
router.include_router(session_router)
