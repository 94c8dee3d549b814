"""Per-field merge rules for NarrationResult deltas."""

from __future__ import annotations

from storyweaver.models import SEALS_FOR_BOSS, Flags, FlagsPatch, InventoryDelta


def merge_flags(flags: Flags, patch: FlagsPatch) -> Flags:
    """Shallow overwrite with the fields the patch carries.

    bossReady only ever turns on: it stays true once set and becomes true
    when two or more seals are held.
    """
    changes = patch.model_dump(exclude_none=True)
    merged = Flags.model_validate({**flags.model_dump(), **changes})
    merged.boss_ready = flags.boss_ready or merged.boss_ready or len(merged.seals) >= SEALS_FOR_BOSS
    return merged


def apply_inventory_delta(inventory: list[str], delta: InventoryDelta) -> list[str]:
    """Drop every exact-name match in delta.remove, then append delta.add."""
    kept = [item for item in inventory if item not in delta.remove]
    return kept + list(delta.add)


def apply_gold_delta(gold: int, delta: int) -> int:
    return max(0, gold + delta)
