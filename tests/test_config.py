"""Tests for environment-driven settings."""

from pathlib import Path

import pytest

from storyweaver.config import Settings, load_settings

ENV_VARS = [
    "STORYWEAVER_DATA_DIR",
    "STORYWEAVER_DM_BASE_URL",
    "STORYWEAVER_DM_TIMEOUT",
    "STORYWEAVER_LOG_LEVEL",
    "STORYWEAVER_SEED",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return tmp_path / "missing.env"


def test_defaults(clean_env):
    settings = load_settings(clean_env)
    assert settings == Settings()
    assert settings.dm_base_url == "http://localhost:13013"
    assert settings.dm_timeout == 30.0
    assert settings.seed is None


def test_env_overrides(clean_env, monkeypatch):
    monkeypatch.setenv("STORYWEAVER_DATA_DIR", "/tmp/sw")
    monkeypatch.setenv("STORYWEAVER_DM_BASE_URL", "https://dm.example")
    monkeypatch.setenv("STORYWEAVER_DM_TIMEOUT", "4.5")
    monkeypatch.setenv("STORYWEAVER_LOG_LEVEL", "debug")
    monkeypatch.setenv("STORYWEAVER_SEED", "1234")
    settings = load_settings(clean_env)
    assert settings.data_dir == Path("/tmp/sw")
    assert settings.dm_base_url == "https://dm.example"
    assert settings.dm_timeout == 4.5
    assert settings.log_level == "DEBUG"
    assert settings.seed == 1234


def test_invalid_numbers_fall_back(clean_env, monkeypatch):
    monkeypatch.setenv("STORYWEAVER_DM_TIMEOUT", "soon")
    monkeypatch.setenv("STORYWEAVER_SEED", "lucky")
    settings = load_settings(clean_env)
    assert settings.dm_timeout == 30.0
    assert settings.seed is None


def test_non_positive_timeout_falls_back(clean_env, monkeypatch):
    monkeypatch.setenv("STORYWEAVER_DM_TIMEOUT", "0")
    assert load_settings(clean_env).dm_timeout == 30.0


def test_dotenv_file_is_read(clean_env, monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("STORYWEAVER_SEED=77\n")
    settings = load_settings(env_file)
    assert settings.seed == 77
    monkeypatch.delenv("STORYWEAVER_SEED", raising=False)
