"""TurnController: owns one session and every transition of it.

Lifecycle (SessionState.phase):

    NotStarted ──begin_tale──▶ InProgress ──end_tale──▶ Ended
                                  │  ▲
                     choose / act │  │ undo_turn
                                  ▼  │
                               InProgress

begin_tale() may be called from any phase and starts over, keeping the
character. While a remote narration is awaited every other transition is
refused; callers are expected to serialise input anyway.
"""

from __future__ import annotations

import logging
import random
from typing import Any

from pydantic import ValidationError

from storyweaver.characters import auto_generate_character, edit_character
from storyweaver.checks import CheckResult, resolve_check
from storyweaver.choices import action_text, choices_for_scene
from storyweaver.config import Settings
from storyweaver.models import (
    HISTORY_WINDOW,
    SEALS_FOR_BOSS,
    START_SCENE,
    Ability,
    ActionSource,
    Beat,
    Choice,
    Flags,
    NarrationResult,
    SessionState,
    TurnPayload,
)
from storyweaver.narrator import LocalNarrator
from storyweaver.storage import SESSION_KEY, Store
from storyweaver.weaver import NarrationProvider, Weaver

from .actions import infer_ability
from .merge import apply_gold_delta, apply_inventory_delta, merge_flags

logger = logging.getLogger(__name__)

OPENING_BEAT = (
    "Torches breathe along brasswork and shadow. Rumors speak of an otherworldly "
    "tide, the Unfathomer, pooling beneath the city's vaults. You stand at the "
    "threshold of the Halls, where echoing floors remember every step."
)
SILENT_BEAT = "(silence)"


class TaleError(RuntimeError):
    """Raised when an action does not fit the current phase of the tale."""


def epilogue_text(state: SessionState) -> str:
    seals = ", ".join(state.flags.seals) or "none"
    if state.flags.boss_dealt_with:
        dealt = "You face the Unfathomer, and the crisis is resolved."
    else:
        dealt = "The Unfathomer still turns beneath the world."
    return (
        f"Epilogue: you carry {state.character.gold} gold and "
        f"{len(state.character.inventory)} keepsakes. Seals gained: {seals}. {dealt} "
        "The city holds its breath, then exhales, and your name threads through "
        "quiet conversations."
    )


class TurnController:
    def __init__(
        self,
        store: Store,
        *,
        state: SessionState | None = None,
        provider: NarrationProvider | None = None,
        rng: random.Random | None = None,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or Settings()
        self.store = store
        if state is None:
            state = SessionState() if settings.seed is None else SessionState(seed=settings.seed)
        self.state = state
        self.rng = rng or random.Random(self.state.seed)
        self.weaver = Weaver(
            store,
            LocalNarrator(self.rng),
            log=self.record_notice,
            base_url=settings.dm_base_url,
            timeout=settings.dm_timeout,
        )
        self.provider: NarrationProvider = provider or self.weaver
        self._resolving = False

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def phase(self) -> str:
        return self.state.phase

    def visible_choices(self) -> list[Choice]:
        choices = list(self.state.choices)
        if self.state.boss_option is not None:
            choices.append(self.state.boss_option)
        return choices

    def record_notice(self, message: str) -> None:
        log = self.state.log
        log.append(message)
        del log[:-HISTORY_WINDOW]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def begin_tale(self) -> None:
        self._require_idle()
        s = self.state
        s.turn = 0
        s.scene = START_SCENE
        s.story_beats = []
        s.transcript = []
        s.flags = Flags(rumors=True)
        s.ended = False
        s.append_beat(OPENING_BEAT)
        s.choices = choices_for_scene(s.scene, self.rng)
        s.boss_option = None
        s.turn += 1
        logger.debug("tale begun seed=%d", s.seed)

    def end_tale(self) -> None:
        self._require_idle()
        s = self.state
        s.append_beat(epilogue_text(s))
        s.choices = []
        s.boss_option = None
        s.ended = True
        logger.debug("tale ended turn=%d", s.turn)

    def undo_turn(self) -> bool:
        """Drop the latest beat. Flag, inventory and gold changes stay applied."""
        self._require_idle()
        s = self.state
        if s.ended or s.turn <= 1 or not s.story_beats:
            return False
        s.story_beats.pop()
        s.transcript.pop()
        s.turn = max(0, s.turn - 1)
        s.choices = choices_for_scene(s.scene, self.rng)
        s.boss_option = None
        return True

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    async def choose(self, index: int) -> Beat:
        """Act with the visible choice at index (the boss option comes last)."""
        self._require_in_progress()
        offered = self.visible_choices()
        if not 0 <= index < len(offered):
            raise TaleError(f"No choice at index {index}")
        choice = offered[index]
        return await self._resolve(action_text(choice), "choice", choice.ability, choice)

    async def act(self, text: str) -> Beat | None:
        """Free-text action. Blank text is ignored."""
        text = text.strip()
        if not text:
            return None
        self._require_in_progress()
        return await self._resolve(text, "freeText", infer_ability(text))

    def build_payload(
        self, action: str, source: ActionSource, ability: Ability, check: CheckResult
    ) -> TurnPayload:
        return TurnPayload(
            action=action,
            source=source,
            stat=ability,
            dc=check.difficulty,
            passed=check.passed,
            game_state=self.state.snapshot(),
            history=self.state.recent_history(),
        )

    def apply_result(
        self, result: NarrationResult, check: CheckResult, choice: Choice | None = None
    ) -> Beat:
        s = self.state
        if result.flags_patch is not None:
            s.flags = merge_flags(s.flags, result.flags_patch)
        if result.inventory_delta is not None:
            s.character.inventory = apply_inventory_delta(s.character.inventory, result.inventory_delta)
        if result.gold_delta is not None:
            s.character.gold = apply_gold_delta(s.character.gold, result.gold_delta)

        s.append_beat(result.story_paragraph or SILENT_BEAT, check.summary())

        moved = False
        if result.scene:
            s.scene = result.scene
        elif choice is not None and check.passed and choice.target_scene and choice.target_scene != s.scene:
            s.scene = choice.target_scene
            moved = True

        # Narrator choices were built for the old scene when the choice moved us
        if result.next_choices and not moved:
            s.choices = list(result.next_choices)
        else:
            s.choices = choices_for_scene(s.scene, self.rng)
        s.boss_option = result.maybe_boss_option

        s.flags.boss_ready = s.flags.boss_ready or len(s.flags.seals) >= SEALS_FOR_BOSS
        s.turn += 1
        return s.story_beats[-1]

    async def _resolve(
        self, action: str, source: ActionSource, ability: Ability, choice: Choice | None = None
    ) -> Beat:
        self._require_idle()
        self._resolving = True
        try:
            check = resolve_check(self.state.character.score(ability), self.rng)
            payload = self.build_payload(action, source, ability, check)
            result = await self.provider.resolve_turn(payload)
            return self.apply_result(result, check, choice)
        finally:
            self._resolving = False

    def _require_idle(self) -> None:
        if self._resolving:
            raise TaleError("A turn is already being resolved")

    def _require_in_progress(self) -> None:
        if self.state.phase != "InProgress":
            raise TaleError(f"The tale is not in progress ({self.state.phase})")

    # ------------------------------------------------------------------
    # Character
    # ------------------------------------------------------------------

    def edit_character(self, fields: dict[str, Any]) -> None:
        self.state.character = edit_character(self.state.character, fields)

    def auto_generate_character(self) -> None:
        self.state.character = auto_generate_character(self.rng)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self) -> None:
        self.store.set(SESSION_KEY, self.state.model_dump(mode="json", by_alias=True))

    def load(self) -> bool:
        """Replace the session with the saved one. False (and no change) if absent or invalid."""
        self._require_idle()
        data = self.store.get(SESSION_KEY)
        if data is None:
            return False
        try:
            self.state = SessionState.model_validate(data)
        except ValidationError as e:
            logger.warning("Ignoring unreadable saved session: %s", e)
            return False
        return True

    def forget_saved(self) -> None:
        self.store.delete(SESSION_KEY)
