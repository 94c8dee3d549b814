"""Authored choice pools.

Each scene owns exactly three choices. choices_for_scene() returns them in a
random order; it does not remember what was offered before, so the same
scene can be replayed indefinitely. Unknown scenes use the Halls pool.
"""

from __future__ import annotations

import random
import re

from storyweaver.models import CLIMAX_SCENE, Choice

CHOICES_PER_SCENE = 3

SCENE_POOLS: dict[str, list[Choice]] = {
    "Halls": [
        Choice(sentence="You study the floor mosaics (INT)", ability="INT", target_scene="Halls"),
        Choice(sentence="You slip between patrols (DEX)", ability="DEX", target_scene="Halls"),
        Choice(sentence="You pry the rusted grate (STR)", ability="STR", target_scene="Halls"),
    ],
    "Archives": [
        Choice(sentence="You scan the index sigils (INT)", ability="INT", target_scene="Archives"),
        Choice(sentence="You charm a wary scribe (CHA)", ability="CHA", target_scene="Archives"),
        Choice(sentence="You reach a high ledge (DEX)", ability="DEX", target_scene="Archives"),
    ],
    "Depths": [
        Choice(sentence="You hold your ground (STR)", ability="STR", target_scene="Depths"),
        Choice(sentence="You read the tide's cadence (INT)", ability="INT", target_scene="Depths"),
        Choice(sentence="You defy it with clear words (CHA)", ability="CHA", target_scene="Depths"),
    ],
}
DEFAULT_SCENE = "Halls"

CONFRONT_ACTION = "You confront the Unfathomer"
CONFRONT_CHOICE = Choice(
    sentence=f"{CONFRONT_ACTION} (CHA)", ability="CHA", target_scene=CLIMAX_SCENE
)

_ABILITY_TAG = re.compile(r"\s*\((STR|DEX|INT|CHA)\)\s*$")


def choices_for_scene(scene: str, rng: random.Random) -> list[Choice]:
    pool = SCENE_POOLS.get(scene, SCENE_POOLS[DEFAULT_SCENE])
    picked = rng.sample(pool, k=min(CHOICES_PER_SCENE, len(pool)))
    return [c.model_copy() for c in picked]


def confront_choice() -> Choice:
    return CONFRONT_CHOICE.model_copy()


def action_text(choice: Choice) -> str:
    """The sentence without its trailing "(ABILITY)" tag."""
    return _ABILITY_TAG.sub("", choice.sentence).strip()
