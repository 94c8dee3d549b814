"""Health check and narrator settings endpoints."""

from fastapi import APIRouter, Depends

from backend.deps import get_controller
from storyweaver.pipeline import TurnController

from .models import UpdateNarrator

router = APIRouter()


@router.get("/health")
async def health():
    """Health check."""
    return {"status": "ok"}


@router.get("/dm")
async def get_narrator(controller: TurnController = Depends(get_controller)):
    """Current narration mode, endpoint and engine tag."""
    weaver = controller.weaver
    return {"mode": weaver.mode, "endpoint": weaver.endpoint, "engine_tag": weaver.engine_tag}


@router.patch("/dm")
async def update_narrator(body: UpdateNarrator, controller: TurnController = Depends(get_controller)):
    """Switch local/remote narration and/or set the remote endpoint (blank resets it)."""
    weaver = controller.weaver
    if body.mode is not None:
        weaver.set_mode(body.mode)
    if "endpoint" in body.model_fields_set:
        weaver.set_endpoint(body.endpoint)
    return {"mode": weaver.mode, "endpoint": weaver.endpoint, "engine_tag": weaver.engine_tag}
