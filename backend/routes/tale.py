"""Tale flow endpoints: begin, end, undo, choice and free-text actions."""

from fastapi import APIRouter, Depends, HTTPException

from backend.deps import get_controller, session_view
from storyweaver.pipeline import TaleError, TurnController

from .models import ActBody, ChoiceBody

router = APIRouter()


@router.get("/session")
async def get_session(controller: TurnController = Depends(get_controller)):
    """Full session state for rendering."""
    return session_view(controller)


@router.post("/tale/begin")
async def begin_tale(controller: TurnController = Depends(get_controller)):
    """Start over with the current character."""
    try:
        controller.begin_tale()
    except TaleError as e:
        raise HTTPException(409, str(e))
    return session_view(controller)


@router.post("/tale/end")
async def end_tale(controller: TurnController = Depends(get_controller)):
    """Append the epilogue and close the choices."""
    try:
        controller.end_tale()
    except TaleError as e:
        raise HTTPException(409, str(e))
    return session_view(controller)


@router.post("/tale/undo")
async def undo_turn(controller: TurnController = Depends(get_controller)):
    """Remove the latest beat. No-op on the first turn."""
    try:
        controller.undo_turn()
    except TaleError as e:
        raise HTTPException(409, str(e))
    return session_view(controller)


@router.post("/tale/choice")
async def choose(body: ChoiceBody, controller: TurnController = Depends(get_controller)):
    """Act with one of the visible choices."""
    try:
        await controller.choose(body.index)
    except TaleError as e:
        raise HTTPException(409, str(e))
    return session_view(controller)


@router.post("/tale/act")
async def act(body: ActBody, controller: TurnController = Depends(get_controller)):
    """Free-text action; the ability is inferred from its wording."""
    try:
        await controller.act(body.text)
    except TaleError as e:
        raise HTTPException(409, str(e))
    return session_view(controller)
