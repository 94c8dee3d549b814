"""Request dependencies."""

from fastapi import Request

from storyweaver.pipeline import TurnController


def get_controller(request: Request) -> TurnController:
    return request.app.state.controller


def session_view(controller: TurnController) -> dict:
    """Read-only render model: full session plus narration settings."""
    view = controller.state.model_dump(mode="json", by_alias=True)
    view["phase"] = controller.phase
    view["visible_choices"] = [c.model_dump(mode="json") for c in controller.visible_choices()]
    view["mode"] = controller.weaver.mode
    view["endpoint"] = controller.weaver.endpoint
    view["engine_tag"] = controller.weaver.engine_tag
    return view
