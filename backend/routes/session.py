"""Save and load the whole session."""

from fastapi import APIRouter, Depends, HTTPException

from backend.deps import get_controller, session_view
from storyweaver.pipeline import TaleError, TurnController

router = APIRouter()


@router.post("/session/save")
async def save_session(controller: TurnController = Depends(get_controller)):
    """Persist the session snapshot (best-effort)."""
    controller.save()
    return {"ok": True}


@router.post("/session/load")
async def load_session(controller: TurnController = Depends(get_controller)):
    """Restore the saved session."""
    try:
        loaded = controller.load()
    except TaleError as e:
        raise HTTPException(409, str(e))
    if not loaded:
        raise HTTPException(404, "No saved session")
    return session_view(controller)
