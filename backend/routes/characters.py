"""Character editing endpoints."""

from fastapi import APIRouter, Depends

from backend.deps import get_controller, session_view
from storyweaver.pipeline import TurnController

from .models import EditCharacter

router = APIRouter()


@router.patch("/character")
async def edit_character(body: EditCharacter, controller: TurnController = Depends(get_controller)):
    """Edit the character. Invalid numbers keep their previous value."""
    controller.edit_character(body.model_dump(exclude_unset=True))
    return session_view(controller)


@router.post("/character/auto")
async def auto_generate(controller: TurnController = Depends(get_controller)):
    """Replace the character with a random one."""
    controller.auto_generate_character()
    return session_view(controller)
