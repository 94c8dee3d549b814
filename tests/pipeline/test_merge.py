"""Tests for narration result merge rules."""

from storyweaver.models import Flags, FlagsPatch, InventoryDelta
from storyweaver.pipeline import apply_inventory_delta, merge_flags
from storyweaver.pipeline.merge import apply_gold_delta


# ── merge_flags ──────────────────────────────────────────────


def test_shallow_overwrite_of_present_fields():
    flags = Flags(rumors=False, seals=["Brass"])
    merged = merge_flags(flags, FlagsPatch(rumors=True))
    assert merged.rumors is True
    assert merged.seals == ["Brass"]


def test_seals_replaced_wholesale():
    merged = merge_flags(Flags(seals=["Brass"]), FlagsPatch(seals=["Stone"]))
    assert merged.seals == ["Stone"]


def test_second_seal_sets_boss_ready():
    merged = merge_flags(Flags(seals=["Brass"]), FlagsPatch(seals=["Brass", "Echo"]))
    assert merged.boss_ready is True


def test_boss_ready_never_reverts():
    merged = merge_flags(Flags(bossReady=True), FlagsPatch(bossReady=False, seals=[]))
    assert merged.boss_ready is True


def test_patch_seals_sanitised():
    patch = FlagsPatch.model_validate({"seals": ["Echo", "Echo", "Iron"]})
    assert merge_flags(Flags(), patch).seals == ["Echo"]


def test_input_flags_untouched():
    flags = Flags(seals=["Brass"])
    merge_flags(flags, FlagsPatch(seals=["Brass", "Echo"], bossDealtWith=True))
    assert flags.seals == ["Brass"]
    assert flags.boss_ready is False
    assert flags.boss_dealt_with is False


def test_empty_patch_is_noop():
    flags = Flags(rumors=True, seals=["Echo"])
    assert merge_flags(flags, FlagsPatch()) == flags


# ── inventory / gold ─────────────────────────────────────────


def test_inventory_remove_then_add():
    delta = InventoryDelta(add=["Key", "Torch"], remove=["Torch"])
    assert apply_inventory_delta(["Torch", "Canteen", "Torch"], delta) == ["Canteen", "Key", "Torch"]


def test_inventory_remove_exact_names_only():
    delta = InventoryDelta(remove=["torch", "Can"])
    assert apply_inventory_delta(["Torch", "Canteen"], delta) == ["Torch", "Canteen"]


def test_gold_clamps_at_zero():
    assert apply_gold_delta(5, -20) == 0
    assert apply_gold_delta(5, 3) == 8
    assert apply_gold_delta(0, 0) == 0
