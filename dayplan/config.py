"""
Planner settings.

Resolved from, lowest to highest priority:
1. built-in defaults
2. ``settings.json`` in the plan directory
3. environment variables (PLANNER_DIR, PLANNER_EDITOR/VISUAL/EDITOR, PLANNER_LOG_LEVEL)
4. explicit overrides (command-line flags)
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Literal, Mapping

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

PLANNER_DIRNAME = ".planner"
SETTINGS_FILENAME = "settings.json"
DEFAULT_EDITOR = "vim"
DEFAULT_LOG_LEVEL = "WARNING"

PLANNER_ENV_VARS = {
    "editor": ("PLANNER_EDITOR", "VISUAL", "EDITOR"),
    "log_level": ("PLANNER_LOG_LEVEL",),
}

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class PlannerSettings(BaseModel):
    """Resolved settings for the planner CLI."""

    root_dir: Path = Field(..., description="Directory holding the daily plan files")
    editor: str = Field(DEFAULT_EDITOR, min_length=1, description="Editor command used by 'edit'")
    log_level: LogLevel = Field(DEFAULT_LOG_LEVEL, description="Root logging level")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @field_validator("root_dir", mode="after")
    @classmethod
    def _expand_root_dir(cls, value: Path) -> Path:
        return value.expanduser()

    @property
    def settings_path(self) -> Path:
        return self.root_dir / SETTINGS_FILENAME


def default_root_dir() -> Path:
    return Path.home() / PLANNER_DIRNAME


def _load_settings_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: expected a JSON object", path)
        return {}
    return {key: data[key] for key in ("editor", "log_level") if key in data}


def _first_env(environ: Mapping[str, str], names: tuple[str, ...]) -> str | None:
    for name in names:
        value = environ.get(name)
        if value:
            return value
    return None


def load_settings(
    overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> PlannerSettings:
    """Resolve settings; raises pydantic.ValidationError on invalid values."""
    environ = os.environ if environ is None else environ
    overrides = {key: value for key, value in (overrides or {}).items() if value is not None}

    root_dir = overrides.get("root_dir") or environ.get("PLANNER_DIR") or default_root_dir()
    root_dir = Path(root_dir).expanduser()

    values: dict[str, Any] = {"root_dir": root_dir}
    values.update(_load_settings_file(root_dir / SETTINGS_FILENAME))

    for key, names in PLANNER_ENV_VARS.items():
        env_value = _first_env(environ, names)
        if env_value:
            values[key] = env_value

    values.update({key: value for key, value in overrides.items() if key != "root_dir"})
    return PlannerSettings(**values)
