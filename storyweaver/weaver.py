"""Weaver: picks the narrator for each turn.

Mode is explicit and caller-controlled, local by default. In remote mode the
turn goes to an HttpNarrator; if that raises NarratorError the turn is
narrated locally instead and one notice goes to the injected log sink. The
caller gets a NarrationResult either way and cannot tell the paths apart.

The remote endpoint is persisted in the store under "dm_endpoint"; blank
input resets it to "/dm-turn".
"""

from __future__ import annotations

import logging
from typing import Literal, Protocol

from storyweaver.models import NarrationResult, TurnPayload
from storyweaver.narrator import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    HttpNarrator,
    LocalNarrator,
    NarratorError,
)
from storyweaver.storage import ENDPOINT_KEY, Store

logger = logging.getLogger(__name__)

Mode = Literal["local", "remote"]

DEFAULT_ENDPOINT = "/dm-turn"
FALLBACK_NOTICE = "Live DM unavailable — falling back to Local."


class NarrationLog(Protocol):
    def __call__(self, message: str) -> None: ...


class NarrationProvider(Protocol):
    async def resolve_turn(self, payload: TurnPayload) -> NarrationResult: ...


class Weaver:
    def __init__(
        self,
        store: Store,
        local: LocalNarrator | None = None,
        log: NarrationLog | None = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._store = store
        self._local = local or LocalNarrator()
        self._log = log
        self._base_url = base_url
        self._timeout = timeout
        self._mode: Mode = "local"
        stored = store.get(ENDPOINT_KEY, DEFAULT_ENDPOINT)
        self._endpoint = stored.strip() if isinstance(stored, str) and stored.strip() else DEFAULT_ENDPOINT

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def engine_tag(self) -> str:
        return "Live" if self._mode == "remote" else "Local"

    def set_mode(self, mode: str) -> None:
        # "live" is accepted as a synonym; anything unknown means local
        self._mode = "remote" if mode in ("remote", "live") else "local"
        logger.debug("narration mode=%s", self._mode)

    def set_endpoint(self, endpoint: str | None) -> None:
        self._endpoint = endpoint.strip() if endpoint and endpoint.strip() else DEFAULT_ENDPOINT
        self._store.set(ENDPOINT_KEY, self._endpoint)

    def remote(self) -> HttpNarrator:
        return HttpNarrator(self._endpoint, base_url=self._base_url, timeout=self._timeout)

    async def resolve_turn(self, payload: TurnPayload) -> NarrationResult:
        if self._mode != "remote":
            return self._local.resolve_turn(payload)
        try:
            return await self.remote().resolve_turn(payload)
        except NarratorError as e:
            logger.warning("Remote narration failed, using local: %s", e)
            if self._log is not None:
                self._log(FALLBACK_NOTICE)
            return self._local.resolve_turn(payload)
