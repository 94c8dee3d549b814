"""Character editing and auto-generation.

Edit ranges (inclusive):
  STR / DEX / INT / CHA   6–18
  HP                      4–30
  Gold                    0–999

Bad input never mutates: a field that is blank, non-numeric or parses to
zero keeps its previous value. Numbers that parse are clamped to the range.
Inventory accepts a comma-separated string or a list; entries are trimmed and
blanks dropped.
"""

from __future__ import annotations

import random
from typing import Any

from storyweaver.checks import clamp
from storyweaver.models import ABILITY_FIELDS, Character

ABILITY_RANGE = (6, 18)
HP_RANGE = (4, 30)
GOLD_RANGE = (0, 999)

NAMES = ["Eldan", "Brassa", "Keled", "Varek", "Moriah", "Thrain", "Ysolda", "Kael"]
STARTING_GEAR = ["Torch", "Canteen", "Oil Flask"]


def _parse_number(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None
    return number or None


def _edited_number(value: Any, current: int, bounds: tuple[int, int]) -> int:
    number = _parse_number(value)
    if number is None:
        return current
    return clamp(number, *bounds)


def parse_inventory(value: str | list[str]) -> list[str]:
    items = value.split(",") if isinstance(value, str) else value
    return [str(item).strip() for item in items if str(item).strip()]


def edit_character(character: Character, fields: dict[str, Any]) -> Character:
    """Return an edited copy. Keys use wire names: name, STR, DEX, INT, CHA, HP, Gold, inventory."""
    edited = character.model_copy(deep=True)

    if "name" in fields:
        name = str(fields["name"] or "").strip()
        if name:
            edited.name = name

    for ability, attr in ABILITY_FIELDS.items():
        if ability in fields:
            setattr(edited, attr, _edited_number(fields[ability], getattr(edited, attr), ABILITY_RANGE))

    if "HP" in fields:
        edited.hp = _edited_number(fields["HP"], edited.hp, HP_RANGE)
    if "Gold" in fields:
        edited.gold = _edited_number(fields["Gold"], edited.gold, GOLD_RANGE)

    if fields.get("inventory") is not None:
        edited.inventory = parse_inventory(fields["inventory"])

    return edited


def auto_generate_character(rng: random.Random) -> Character:
    return Character(
        name=rng.choice(NAMES),
        STR=rng.randint(8, 18),
        DEX=rng.randint(8, 18),
        INT=rng.randint(8, 18),
        CHA=rng.randint(8, 18),
        HP=rng.randint(8, 20),
        Gold=rng.randint(0, 25),
        inventory=STARTING_GEAR[: rng.randint(1, 3)],
    )
