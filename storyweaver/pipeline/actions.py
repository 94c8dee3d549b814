"""Free-text ability inference.

Keyword sets are checked in priority order STR, DEX, INT, CHA; the first
category with a whole-word, case-insensitive hit wins. No hit means INT.
"""

from __future__ import annotations

import re

from storyweaver.models import Ability

DEFAULT_ABILITY: Ability = "INT"

ABILITY_KEYWORDS: list[tuple[Ability, re.Pattern[str]]] = [
    ("STR", re.compile(r"\b(push|lift|break|smash|force|hold|shove|drag)\b")),
    ("DEX", re.compile(r"\b(sneak|hide|slip|dodge|climb|balance|steal|pick)\b")),
    ("INT", re.compile(r"\b(look|inspect|study|analyze|read|recall|solve|decipher|investigate)\b")),
    ("CHA", re.compile(r"\b(speak|persuade|charm|intimidate|perform|negotiate|parley)\b")),
]


def infer_ability(text: str) -> Ability:
    lowered = text.lower()
    for ability, pattern in ABILITY_KEYWORDS:
        if pattern.search(lowered):
            return ability
    return DEFAULT_ABILITY
