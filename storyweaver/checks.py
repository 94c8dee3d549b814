"""Check resolution helpers.

A check is a d20 roll plus the ability modifier, compared against a
difficulty drawn per check:

    modifier   = floor((score - 10) / 2)
    difficulty = clamp(10 + jitter, 8, 18), jitter uniform in [-1, +3]
    passed     = roll + modifier >= difficulty

All functions take the RNG explicitly and mutate nothing else.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

BASE_DIFFICULTY = 10
DIFFICULTY_JITTER = (-1, 3)
DIFFICULTY_RANGE = (8, 18)


@dataclass(frozen=True)
class CheckResult:
    roll: int
    modifier: int
    difficulty: int
    total: int
    passed: bool

    def summary(self) -> str:
        """Roll annotation attached to the beat, e.g. "d20 15 +1 vs DC 10 => 16"."""
        return (
            f"d20 {self.roll} {format_modifier(self.modifier)} "
            f"vs DC {self.difficulty} => {self.total}"
        )


def clamp(n: int, low: int, high: int) -> int:
    return max(low, min(high, n))


def modifier_from_score(score: int) -> int:
    # floor division matches floor((s - 10) / 2) for negatives too
    return (score - 10) // 2


def format_modifier(modifier: int) -> str:
    return f"+{modifier}" if modifier >= 0 else str(modifier)


def roll_between(rng: random.Random, low: int, high: int) -> int:
    """Uniform integer in [low, high], inclusive on both ends."""
    return rng.randint(low, high)


def roll_d20(rng: random.Random) -> int:
    return roll_between(rng, 1, 20)


def roll_difficulty(rng: random.Random) -> int:
    jitter = roll_between(rng, *DIFFICULTY_JITTER)
    return clamp(BASE_DIFFICULTY + jitter, *DIFFICULTY_RANGE)


def check_passes(total: int, difficulty: int) -> bool:
    return total >= difficulty


def resolve_check(score: int, rng: random.Random) -> CheckResult:
    """Roll one check for an ability score. The caller decides what to do with it."""
    difficulty = roll_difficulty(rng)
    roll = roll_d20(rng)
    modifier = modifier_from_score(score)
    total = roll + modifier
    return CheckResult(
        roll=roll,
        modifier=modifier,
        difficulty=difficulty,
        total=total,
        passed=check_passes(total, difficulty),
    )
