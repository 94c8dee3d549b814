"""End-to-end tale scenarios with the built-in narrator.

Scenario A: a strong dwarf forces a door:
  Character STR 12 (+1), d20 forced to 15, DC forced to 10.
  Expect: passed, total 16, beat echoes the capitalised action.

Scenario B: the second seal:
  Start holding {Brass}; the narrator awards Echo.
  Expect: bossReady flips to true, and the next local narration offers the
  confrontation choice.

Scenario C: the confrontation:
  With the gate open, pick the confrontation choice and pass.
  Expect: scene moves to Depths, the Unfathomer is dealt with, and the
  epilogue says so.

Scenario D: a long random session:
  Expect the session invariants to hold after every turn.
"""

import random

import pytest

from storyweaver.choices import CONFRONT_ACTION, SCENE_POOLS
from storyweaver.models import NarrationResult, TurnPayload
from storyweaver.narrator import LocalNarrator
from storyweaver.pipeline import TurnController


class RecordingLocal:
    """LocalNarrator that remembers payloads; optional canned results go first."""

    def __init__(self, rng: random.Random, *canned: NarrationResult) -> None:
        self.local = LocalNarrator(rng)
        self.canned = list(canned)
        self.payloads: list[TurnPayload] = []
        self.results: list[NarrationResult] = []

    async def resolve_turn(self, payload: TurnPayload) -> NarrationResult:
        self.payloads.append(payload)
        result = self.canned.pop(0) if self.canned else self.local.resolve_turn(payload)
        self.results.append(result)
        return result


async def test_scenario_a_forced_roll(store, scripted) -> None:
    rng = scripted(roll=15, jitter=0, seal=2)
    narrator = RecordingLocal(rng)
    c = TurnController(store, provider=narrator, rng=rng)
    c.state.character.strength = 12
    c.begin_tale()

    beat = await c.act("force the rusted door")

    payload = narrator.payloads[0]
    assert payload.stat == "STR"
    assert payload.dc == 10
    assert payload.passed is True
    assert beat.roll_info == "d20 15 +1 vs DC 10 => 16"
    assert "Force the rusted door" in beat.text


async def test_scenario_b_second_seal_opens_gate(store, scripted) -> None:
    rng = scripted(roll=18, jitter=0, seal=2)
    award_echo = NarrationResult.model_validate({
        "story_paragraph": "A sigil warms: the Seal of Echo.",
        "flags_patch": {"seals": ["Brass", "Echo"]},
    })
    narrator = RecordingLocal(rng, award_echo)
    c = TurnController(store, provider=narrator, rng=rng)
    c.begin_tale()
    c.state.flags.seals = ["Brass"]
    assert c.state.flags.boss_ready is False

    await c.act("study the echoing wall")
    assert c.state.flags.seals == ["Brass", "Echo"]
    assert c.state.flags.boss_ready is True

    await c.act("listen")
    assert narrator.results[-1].maybe_boss_option is not None
    assert c.visible_choices()[-1].sentence.startswith(CONFRONT_ACTION)


async def test_scenario_b_local_award_offers_boss_same_turn(store, scripted) -> None:
    rng = scripted(roll=18, jitter=0, seal=1)
    c = TurnController(store, rng=rng)
    c.begin_tale()
    c.state.flags.seals = ["Brass"]

    await c.act("study the echoing wall")
    assert len(c.state.flags.seals) == 2
    assert c.state.flags.boss_ready is True
    assert c.state.boss_option is not None


async def test_scenario_c_confrontation(store, scripted) -> None:
    rng = scripted(roll=20, jitter=0, seal=2)
    c = TurnController(store, rng=rng)
    c.begin_tale()
    c.state.flags.seals = ["Brass", "Echo"]
    await c.act("look around")

    boss_index = len(c.visible_choices()) - 1
    assert c.visible_choices()[boss_index].target_scene == "Depths"
    await c.choose(boss_index)

    assert c.state.scene == "Depths"
    assert c.state.flags.boss_dealt_with is True
    assert {ch.sentence for ch in c.state.choices} == {ch.sentence for ch in SCENE_POOLS["Depths"]}

    c.end_tale()
    assert "the crisis is resolved" in c.state.story_beats[-1].text
    assert c.visible_choices() == []


async def test_failed_confrontation_stays_put(store, scripted) -> None:
    rng = scripted(roll=1, jitter=3, seal=2)
    c = TurnController(store, rng=rng)
    c.begin_tale()
    c.state.flags.boss_ready = True
    c.state.boss_option = c.state.choices[0].model_copy(
        update={"sentence": f"{CONFRONT_ACTION} (CHA)", "ability": "CHA", "target_scene": "Depths"}
    )
    await c.choose(len(c.visible_choices()) - 1)
    assert c.state.scene == "Halls"
    assert c.state.flags.boss_dealt_with is False


@pytest.mark.parametrize("seed", [1, 7, 2024])
async def test_scenario_d_invariants_hold(store, seed) -> None:
    c = TurnController(store, rng=random.Random(seed))
    c.begin_tale()
    rng = random.Random(seed + 1)
    boss_seen = False

    for _ in range(120):
        if rng.random() < 0.5:
            await c.choose(rng.randrange(len(c.visible_choices())))
        else:
            await c.act(rng.choice(["push it", "sneak past", "read the wall", "persuade them", "wait"]))

        s = c.state
        assert len(s.transcript) == len(s.story_beats)
        assert s.turn == len(s.story_beats)
        assert len(s.flags.seals) == len(set(s.flags.seals)) <= 3
        assert set(s.flags.seals) <= {"Brass", "Echo", "Stone"}
        assert s.character.gold >= 0
        if boss_seen:
            assert s.flags.boss_ready is True
        boss_seen = s.flags.boss_ready
