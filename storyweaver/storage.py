"""Key-value persistence.

The engine only needs three operations (get, set, delete) and treats all
of them as best-effort: any failure underneath is logged and swallowed, get
falls back to the caller's default. Values must be JSON-serialisable.

Two keys are used:

    dds_state     ← whole-session snapshot (SessionState dumped by alias)
    dm_endpoint   ← remote narrator endpoint

Implementations:

    JsonFileStore: one ``{key}.json`` file per key under a base directory.
    MemoryStore: a plain dict; used by tests and throwaway sessions.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)

SESSION_KEY = "dds_state"
ENDPOINT_KEY = "dm_endpoint"

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class Store(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStore:
    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str, default: Any = None) -> Any:
        raw = self._data.get(key)
        if raw is None:
            return default
        return json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        # Stored as JSON text so callers never share mutable state with the store
        try:
            self._data[key] = json.dumps(value)
        except (TypeError, ValueError) as e:
            logger.warning("store set failed key=%s: %s", key, e)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore:
    def __init__(self, base_path: Path) -> None:
        self._base = base_path
        try:
            self._base.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning("cannot create store directory %s: %s", base_path, e)

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid store key {key!r}")
        return self._base / f"{key}.json"

    def get(self, key: str, default: Any = None) -> Any:
        try:
            path = self._path(key)
            if not path.is_file():
                return default
            return json.loads(path.read_text())
        except (OSError, ValueError) as e:
            logger.warning("store get failed key=%s: %s", key, e)
            return default

    def set(self, key: str, value: Any) -> None:
        try:
            self._path(key).write_text(json.dumps(value, indent=2))
        except (OSError, TypeError, ValueError) as e:
            logger.warning("store set failed key=%s: %s", key, e)

    def delete(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except (OSError, ValueError) as e:
            logger.warning("store delete failed key=%s: %s", key, e)
