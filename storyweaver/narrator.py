"""Narrators: turn a resolved check into story text and state deltas.

Both implementations take a TurnPayload (action, ability, DC, pass/fail,
snapshot, recent history) and return a NarrationResult. The check has
already been rolled by the caller; a narrator only describes it.

    LocalNarrator: synchronous, built-in prose. Never fails.
    HttpNarrator: POSTs the payload as JSON to a remote narrator service
                  and validates the answer. Raises NarratorError on any
                  transport, status or format problem.

The Weaver (storyweaver.weaver) decides which one runs and falls back from
remote to local.
"""

from __future__ import annotations

import logging
import random

import httpx
from pydantic import ValidationError

from storyweaver.choices import CONFRONT_ACTION, choices_for_scene, confront_choice
from storyweaver.models import (
    SEAL_VOCABULARY,
    SEALS_FOR_BOSS,
    Ability,
    FlagsPatch,
    InventoryDelta,
    NarrationResult,
    TurnPayload,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:13013"
DEFAULT_TIMEOUT = 30.0

SEAL_AWARD_ODDS = 5  # 1 in 5 on a passed check


# ---------------------------------------------------------------------------
# Local prose
# ---------------------------------------------------------------------------

SUCCESS_FLAVOR: dict[Ability, list[str]] = {
    "STR": ["you force the way", "you wrestle the obstacle", "you brace and heave"],
    "DEX": ["you move with quiet balance", "you slip along blind angles", "you work with careful hands"],
    "INT": ["you reason through the pattern", "you trace the hidden logic", "you test a small hypothesis"],
    "CHA": ["you speak with steady poise", "you read the room and guide it", "you put warm conviction to work"],
}

FAILURE_FLAVOR: dict[Ability, str] = {
    "STR": "Your grip bites and the metal sings; the hall hears too much.",
    "DEX": "A heel kisses grit; the torchlight notices.",
    "INT": "Two symbols argue; the truth steps back.",
    "CHA": "A word lands wrong; faces cool a measure.",
}

SEAL_LINE = " A faint sigil warms at your wrist: the Seal of {seal}."
RUMOR_NUDGE = " The city still whispers about the Unfathomer below; its tide is patient, not kind."


def capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def compose_beat_text(
    action: str,
    passed: bool,
    ability: Ability,
    rng: random.Random,
    awarded_seal: str | None = None,
) -> str:
    echo = capitalize(action.strip().rstrip("."))
    if not passed:
        return f"{echo}. {FAILURE_FLAVOR[ability]}{RUMOR_NUDGE}"
    flavor = capitalize(rng.choice(SUCCESS_FLAVOR[ability]))
    seal_line = SEAL_LINE.format(seal=awarded_seal) if awarded_seal else ""
    return f"{echo}. {flavor} and the moment tilts your way.{seal_line}{RUMOR_NUDGE}"


class LocalNarrator:
    """Built-in narrator. Deterministic apart from the injected RNG."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def _maybe_award_seal(self, passed: bool, seals: list[str]) -> str | None:
        if not passed or len(seals) >= len(SEAL_VOCABULARY):
            return None
        if self._rng.randint(1, SEAL_AWARD_ODDS) != 1:
            return None
        pool = [s for s in SEAL_VOCABULARY if s not in seals]
        return self._rng.choice(pool) if pool else None

    def resolve_turn(self, payload: TurnPayload) -> NarrationResult:
        state = payload.game_state
        seals = list(state.flags.seals)
        awarded = self._maybe_award_seal(payload.passed, seals)

        patch: dict = {}
        if awarded:
            patch["seals"] = seals + [awarded]
        if payload.passed and payload.action == CONFRONT_ACTION:
            patch["boss_dealt_with"] = True

        seal_count = len(seals) + (1 if awarded else 0)
        boss_option = None
        if state.flags.boss_ready or seal_count >= SEALS_FOR_BOSS:
            boss_option = confront_choice()

        logger.debug(
            "local narration stat=%s passed=%s awarded=%s", payload.stat, payload.passed, awarded
        )
        return NarrationResult(
            story_paragraph=compose_beat_text(
                payload.action, payload.passed, payload.stat, self._rng, awarded
            ),
            flags_patch=FlagsPatch(**patch),
            inventory_delta=InventoryDelta(),
            gold_delta=0,
            next_choices=choices_for_scene(state.scene, self._rng),
            maybe_boss_option=boss_option,
        )


# ---------------------------------------------------------------------------
# HttpNarrator: remote narrator service
# ---------------------------------------------------------------------------

class HttpNarrator:
    """Async client for a remote narrator.

    Wire format:
      POST {endpoint}  body: TurnPayload dumped by alias
                       {"action", "source", "stat", "dc", "passed",
                        "game_state": {"character", "flags", "scene", "turn"},
                        "history": [...]}
      Response: a NarrationResult object, every field optional.

    Args:
        endpoint: Absolute URL, or a path such as "/dm-turn" resolved
                  against base_url.
        base_url: Base for relative endpoints.
        timeout:  HTTP timeout in seconds. An expired timeout is a failure
                  like any other.
    """

    def __init__(
        self,
        endpoint: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._endpoint = endpoint
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def resolve_turn(self, payload: TurnPayload) -> NarrationResult:
        body = payload.model_dump(mode="json", by_alias=True)
        logger.debug("remote narration endpoint=%s turn=%d", self._endpoint, payload.game_state.turn)

        try:
            async with httpx.AsyncClient(base_url=self._base_url, timeout=self._timeout) as client:
                resp = await client.post(
                    self._endpoint, json=body, headers={"Content-Type": "application/json"}
                )
                resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise NarratorError(f"Narrator returned HTTP {e.response.status_code}") from e
        except httpx.TimeoutException as e:
            raise NarratorError(f"Narrator timed out after {self._timeout}s") from e
        except httpx.HTTPError as e:
            raise NarratorError(f"Cannot reach narrator at {self._endpoint}") from e
        except httpx.InvalidURL as e:
            raise NarratorError(f"Invalid narrator endpoint {self._endpoint!r}") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise NarratorError("Narrator returned invalid JSON") from e

        try:
            return NarrationResult.model_validate(data)
        except ValidationError as e:
            raise NarratorError(f"Unexpected narration format: {e.error_count()} errors") from e


class NarratorError(RuntimeError):
    """Raised by HttpNarrator for all connection and protocol failures."""
