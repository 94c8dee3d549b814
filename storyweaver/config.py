"""Environment-driven settings.

Read once at start-up after loading ``.env`` from the project root:

    STORYWEAVER_DATA_DIR      JSON store directory            (./data)
    STORYWEAVER_DM_BASE_URL   base for relative DM endpoints  (http://localhost:13013)
    STORYWEAVER_DM_TIMEOUT    remote narrator timeout, secs   (30)
    STORYWEAVER_LOG_LEVEL     launcher log level              (INFO)
    STORYWEAVER_SEED          fixed session seed              (random)

Unparseable numbers fall back to their defaults.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

from storyweaver.narrator import DEFAULT_BASE_URL, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

ROOT = Path(__file__).parent.parent


class Settings(BaseModel):
    data_dir: Path = ROOT / "data"
    dm_base_url: str = DEFAULT_BASE_URL
    dm_timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"
    seed: int | None = None


def _env_number(name: str, cast, default):
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r", name, raw)
        return default


def load_settings(env_file: Path | None = None) -> Settings:
    load_dotenv(env_file or ROOT / ".env")
    defaults = Settings()
    timeout = _env_number("STORYWEAVER_DM_TIMEOUT", float, defaults.dm_timeout)
    return Settings(
        data_dir=Path(os.getenv("STORYWEAVER_DATA_DIR") or defaults.data_dir),
        dm_base_url=os.getenv("STORYWEAVER_DM_BASE_URL") or defaults.dm_base_url,
        dm_timeout=timeout if timeout > 0 else defaults.dm_timeout,
        log_level=(os.getenv("STORYWEAVER_LOG_LEVEL") or defaults.log_level).upper(),
        seed=_env_number("STORYWEAVER_SEED", int, None),
    )
