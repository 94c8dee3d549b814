"""Pydantic request models for API endpoints."""

from typing import Any

from pydantic import BaseModel


class ChoiceBody(BaseModel):
    index: int


class ActBody(BaseModel):
    text: str


class UpdateNarrator(BaseModel):
    mode: str | None = None
    endpoint: str | None = None


class EditCharacter(BaseModel):
    """Raw edit form values; bad numbers are tolerated and ignored."""

    name: str | None = None
    STR: Any = None
    DEX: Any = None
    INT: Any = None
    CHA: Any = None
    HP: Any = None
    Gold: Any = None
    inventory: str | list[str] | None = None
