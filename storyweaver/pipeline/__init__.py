"""Turn pipeline.

One player action, end to end:
  1. Pick the ability: from the choice, or inferred from free text.
  2. Roll the check (storyweaver.checks) before any narration.
  3. Build the payload: action, source, ability, DC, pass/fail, snapshot of
     {character, flags, scene, turn} and the last 10 transcript lines.
  4. Hand it to the narration provider (Weaver: local or remote + fallback).
  5. Merge the result: flags patch, inventory delta, gold delta (floored at
     0), beat with roll annotation, scene, next choices, boss option,
     bossReady (monotone), turn + 1.

TurnController is the only code that mutates a SessionState.
"""

from .actions import infer_ability  # noqa: F401
from .controller import TaleError, TurnController  # noqa: F401
from .merge import apply_inventory_delta, merge_flags  # noqa: F401
