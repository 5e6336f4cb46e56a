# app/config.py
from __future__ import annotations
from pathlib import Path
import json
import logging

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from typemaster.app.errors import ConfigError

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_LESSONS_FILE = PACKAGE_DIR / "assets" / "lessons.json"
SETTINGS_FILE = Path("settings.json")


class Settings(BaseSettings):
    """Application settings. TYPEMASTER_* environment variables and settings.json override the defaults."""

    db_path: str = Field(default="data/typemaster.db", min_length=1)
    log_file: str = Field(default="app.log", min_length=1)
    log_level: str = "INFO"
    tick_ms: int = Field(default=100, gt=0)
    recent_sessions_limit: int = Field(default=10, ge=0)
    lessons_file: str = str(DEFAULT_LESSONS_FILE)

    model_config = SettingsConfigDict(
        env_prefix="TYPEMASTER_",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    @field_validator("tick_ms", "recent_sessions_limit", mode="before")
    @classmethod
    def _no_bools(cls, v):
        # bool is an int subclass; `true` in settings.json is a mistake
        if isinstance(v, bool):
            raise ValueError("expected an integer, got a boolean")
        return v

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {v!r}")
        return level


def settings_from_dict(data: dict) -> Settings:
    unknown = set(data) - set(Settings.model_fields)
    for key in sorted(unknown):
        logger.warning("Ignoring unknown setting %r", key)
    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e


def load_settings(path: Path | str = SETTINGS_FILE) -> Settings:
    """Defaults, overridden by settings.json (if present)."""
    path = Path(path)
    if not path.exists():
        return settings_from_dict({})
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Failed to read %s, using defaults: %s", path, e)
        return settings_from_dict({})
    if not isinstance(data, dict):
        logger.warning("%s must contain a JSON object, using defaults", path)
        return settings_from_dict({})
    return settings_from_dict(data)
