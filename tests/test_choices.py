"""Tests for storyweaver.choices."""

import random

import pytest

from storyweaver.choices import (
    CONFRONT_ACTION,
    SCENE_POOLS,
    action_text,
    choices_for_scene,
    confront_choice,
)
from storyweaver.models import Choice


@pytest.mark.parametrize("scene", ["Halls", "Archives", "Depths"])
def test_returns_permutation_of_pool(scene):
    rng = random.Random(3)
    picked = choices_for_scene(scene, rng)
    assert len(picked) == 3
    assert sorted(c.sentence for c in picked) == sorted(c.sentence for c in SCENE_POOLS[scene])


def test_unknown_scene_uses_default_pool():
    picked = choices_for_scene("Observatory", random.Random(0))
    assert {c.sentence for c in picked} == {c.sentence for c in SCENE_POOLS["Halls"]}


def test_order_varies_across_calls():
    rng = random.Random(5)
    orders = {tuple(c.sentence for c in choices_for_scene("Halls", rng)) for _ in range(50)}
    assert len(orders) > 1


def test_returned_choices_do_not_alias_pool():
    picked = choices_for_scene("Archives", random.Random(1))
    picked[0].sentence = "changed"
    assert all(c.sentence != "changed" for c in SCENE_POOLS["Archives"])


def test_pool_choices_stay_in_their_scene():
    for scene, pool in SCENE_POOLS.items():
        assert all(c.target_scene == scene for c in pool)


def test_action_text_strips_ability_tag():
    assert action_text(Choice(sentence="You pry the rusted grate (STR)", ability="STR")) == "You pry the rusted grate"


def test_action_text_without_tag():
    assert action_text(Choice(sentence="  Wait quietly ", ability="DEX")) == "Wait quietly"


def test_confront_choice():
    choice = confront_choice()
    assert choice.ability == "CHA"
    assert choice.target_scene == "Depths"
    assert action_text(choice) == CONFRONT_ACTION
