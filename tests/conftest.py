import random

import pytest

from storyweaver.models import Character, Flags, Snapshot, TurnPayload
from storyweaver.storage import MemoryStore


class ScriptedRandom(random.Random):
    """A real Random whose randint answers from a script keyed by (low, high).

    A list value is consumed one entry per call, then falls back to the real
    generator; a plain int is returned every time.
    """

    def __init__(self, script: dict[tuple[int, int], int | list[int]] | None = None, seed: int = 0):
        super().__init__(seed)
        self.script = {
            bounds: list(v) if isinstance(v, list) else v
            for bounds, v in (script or {}).items()
        }

    def randint(self, a: int, b: int) -> int:
        planned = self.script.get((a, b))
        if isinstance(planned, list):
            return planned.pop(0) if planned else super().randint(a, b)
        if planned is not None:
            return planned
        return super().randint(a, b)


@pytest.fixture
def scripted():
    """Factory: scripted(roll=15, jitter=0, seal=2) → ScriptedRandom."""
    def _make(roll=None, jitter=None, seal=None, seed=0):
        script = {}
        if roll is not None:
            script[(1, 20)] = roll
        if jitter is not None:
            script[(-1, 3)] = jitter
        if seal is not None:
            script[(1, 5)] = seal
        return ScriptedRandom(script, seed=seed)
    return _make


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def make_payload():
    def _make(action="push the door", stat="STR", passed=True, dc=10,
              seals=(), boss_ready=False, scene="Halls", turn=1, source="freeText",
              history=()):
        return TurnPayload(
            action=action,
            source=source,
            stat=stat,
            dc=dc,
            passed=passed,
            game_state=Snapshot(
                character=Character(),
                flags=Flags(seals=list(seals), bossReady=boss_ready),
                scene=scene,
                turn=turn,
            ),
            history=list(history),
        )
    return _make
