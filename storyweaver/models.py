"""Core domain models.

Every stage of a turn (payload building, local or remote narration, result
merging and persistence) operates on these types. Pydantic validates them
at each data boundary: a remote narrator's response is parsed into
NarrationResult before anything touches the session, and a saved session is
parsed back into SessionState on load.

Wire names follow the narrator protocol: character abilities are "STR",
"DEX", "INT", "CHA", "HP" and "Gold"; flags use "bossReady" and
"bossDealtWith". Dump with ``by_alias=True`` whenever data leaves the process.
"""

from __future__ import annotations

import random
from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

Ability = Literal["STR", "DEX", "INT", "CHA"]
ActionSource = Literal["choice", "freeText"]
Phase = Literal["NotStarted", "InProgress", "Ended"]

ABILITIES: tuple[Ability, ...] = ("STR", "DEX", "INT", "CHA")

SEAL_VOCABULARY = ("Brass", "Echo", "Stone")
SEALS_FOR_BOSS = 2

SCENES = ("Halls", "Archives", "Depths")
START_SCENE = "Halls"
CLIMAX_SCENE = "Depths"

HISTORY_WINDOW = 10


def new_seed() -> int:
    return random.randint(1, 9_999_999)


def normalize_seals(seals: list[str]) -> list[str]:
    """Keep known seal tokens in first-seen order, dropping repeats."""
    result: list[str] = []
    for seal in seals:
        if seal in SEAL_VOCABULARY and seal not in result:
            result.append(seal)
    return result


# ---------------------------------------------------------------------------
# Character and flags
# ---------------------------------------------------------------------------

class Character(BaseModel):
    """The player character. Ability scores are unconstrained at runtime."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = "Eldan"
    strength: int = Field(12, alias="STR")
    dexterity: int = Field(14, alias="DEX")
    intelligence: int = Field(12, alias="INT")
    charisma: int = Field(10, alias="CHA")
    hp: int = Field(14, alias="HP")
    gold: int = Field(5, alias="Gold", ge=0)
    inventory: list[str] = Field(default_factory=lambda: ["Torch", "Canteen"])

    def score(self, ability: Ability) -> int:
        return getattr(self, ABILITY_FIELDS[ability])


ABILITY_FIELDS: dict[str, str] = {
    "STR": "strength",
    "DEX": "dexterity",
    "INT": "intelligence",
    "CHA": "charisma",
}


class Flags(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    rumors: bool = False
    seals: list[str] = Field(default_factory=list)
    boss_ready: bool = Field(False, alias="bossReady")
    boss_dealt_with: bool = Field(False, alias="bossDealtWith")

    @field_validator("seals")
    @classmethod
    def _known_seals(cls, v: list[str]) -> list[str]:
        return normalize_seals(v)

    @property
    def seal_count(self) -> int:
        return len(self.seals)


class FlagsPatch(BaseModel):
    """Partial flags overwrite. Only fields that are present get merged."""

    model_config = ConfigDict(populate_by_name=True)

    rumors: bool | None = None
    seals: list[str] | None = None
    boss_ready: bool | None = Field(None, alias="bossReady")
    boss_dealt_with: bool | None = Field(None, alias="bossDealtWith")

    @field_validator("seals")
    @classmethod
    def _known_seals(cls, v: list[str] | None) -> list[str] | None:
        return None if v is None else normalize_seals(v)


# ---------------------------------------------------------------------------
# Choices, beats, narration results
# ---------------------------------------------------------------------------

class Choice(BaseModel):
    """A candidate action. Remote narrators may send "stat"/"scene" keys."""

    model_config = ConfigDict(populate_by_name=True)

    sentence: str
    ability: Ability = Field(validation_alias=AliasChoices("ability", "stat"))
    target_scene: str | None = Field(
        None, validation_alias=AliasChoices("target_scene", "targetScene", "scene")
    )


class Beat(BaseModel):
    """One appended unit of story text, optionally annotated with its roll."""

    text: str
    roll_info: str | None = None


class InventoryDelta(BaseModel):
    add: list[str] = Field(default_factory=list)
    remove: list[str] = Field(default_factory=list)


class NarrationResult(BaseModel):
    """A narrator's answer for one turn. Every field is independently optional."""

    story_paragraph: str | None = None
    flags_patch: FlagsPatch | None = None
    inventory_delta: InventoryDelta | None = None
    gold_delta: int | None = None
    next_choices: list[Choice] | None = None
    maybe_boss_option: Choice | None = None
    scene: str | None = None


# ---------------------------------------------------------------------------
# Payload sent to a narrator
# ---------------------------------------------------------------------------

class Snapshot(BaseModel):
    """The minimal slice of session state a narrator gets to see."""

    character: Character
    flags: Flags
    scene: str
    turn: int


class TurnPayload(BaseModel):
    action: str
    source: ActionSource
    stat: Ability
    dc: int
    passed: bool
    game_state: Snapshot
    history: list[str] = Field(default_factory=list, max_length=HISTORY_WINDOW)


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------

class SessionState(BaseModel):
    """Everything a session carries between turns; saved and loaded wholesale."""

    model_config = ConfigDict(populate_by_name=True)

    seed: int = Field(default_factory=new_seed)
    turn: int = 0
    scene: str = START_SCENE
    character: Character = Field(default_factory=Character)
    flags: Flags = Field(default_factory=Flags)
    story_beats: list[Beat] = Field(default_factory=list)
    transcript: list[str] = Field(default_factory=list)
    choices: list[Choice] = Field(default_factory=list)
    boss_option: Choice | None = None
    ended: bool = False
    log: list[str] = Field(default_factory=list)

    @property
    def phase(self) -> Phase:
        if not self.story_beats:
            return "NotStarted"
        if self.ended:
            return "Ended"
        return "InProgress"

    def snapshot(self) -> Snapshot:
        return Snapshot(
            character=self.character.model_copy(deep=True),
            flags=self.flags.model_copy(deep=True),
            scene=self.scene,
            turn=self.turn,
        )

    def recent_history(self) -> list[str]:
        return list(self.transcript[-HISTORY_WINDOW:])

    def append_beat(self, text: str, roll_info: str | None = None) -> None:
        self.story_beats.append(Beat(text=text, roll_info=roll_info))
        self.transcript.append(text)
