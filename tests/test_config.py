import json

import pytest
from pydantic import ValidationError

from typemaster.app.config import Settings, load_settings
from typemaster.app.errors import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    for name in ("DB_PATH", "LOG_FILE", "LOG_LEVEL", "TICK_MS", "RECENT_SESSIONS_LIMIT", "LESSONS_FILE"):
        monkeypatch.delenv(f"TYPEMASTER_{name}", raising=False)


def write(tmp_path, data):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_defaults_when_file_missing(tmp_path) -> None:
    settings = load_settings(tmp_path / "settings.json")
    assert settings == Settings()
    assert settings.tick_ms == 100
    assert settings.recent_sessions_limit == 10


def test_overrides_and_unknown_keys(tmp_path) -> None:
    path = write(tmp_path, {"tick_ms": "50", "db_path": "x/y.db", "log_level": "debug", "colour": "red"})
    settings = load_settings(path)
    assert settings.tick_ms == 50
    assert settings.db_path == "x/y.db"
    assert settings.log_level == "DEBUG"
    assert not hasattr(settings, "colour")


def test_environment_overrides_default(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("TYPEMASTER_TICK_MS", "250")
    assert load_settings(tmp_path / "settings.json").tick_ms == 250


def test_settings_are_immutable() -> None:
    settings = Settings()
    with pytest.raises(ValidationError):
        settings.tick_ms = 5


def test_malformed_file_falls_back_to_defaults(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{oops", encoding="utf-8")
    assert load_settings(path) == Settings()
    path.write_text("[1, 2]", encoding="utf-8")
    assert load_settings(path) == Settings()


@pytest.mark.parametrize(
    "data",
    [
        {"tick_ms": 0},
        {"recent_sessions_limit": -1},
        {"log_level": "LOUD"},
        {"tick_ms": "fast"},
        {"tick_ms": 12.9},
        {"recent_sessions_limit": True},
        {"db_path": None},
        {"db_path": ""},
    ],
)
def test_invalid_values_raise(tmp_path, data) -> None:
    with pytest.raises(ConfigError):
        load_settings(write(tmp_path, data))
