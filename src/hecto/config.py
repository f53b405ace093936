"""Hierarchical editor settings loaded from JSON files.

Precedence, lowest first: built-in defaults, global
``~/.hecto/settings.json``, project ``./.hecto/settings.json``, the
``HECTO_LOG_FILE`` environment variable, then CLI overrides.  Keys are camelCase in the JSON files.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from hecto.theme import Theme, default_theme

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".hecto"
LOG_FILE_ENV = "HECTO_LOG_FILE"


# --- Settings schema ---


@dataclass
class ThemeSettings:
    """Background colours of the highlight annotations."""

    match: str = "#d3d3d3"
    selected_match: str = "#ffff99"
    selection: str = "#3a5fcd"

    def build(self) -> Theme:
        return default_theme(
            match=self.match,
            selected_match=self.selected_match,
            selection=self.selection,
        )


@dataclass
class Settings:
    message_timeout: float = 5.0
    quit_times: int = 3
    log_level: str = "warning"
    log_file: str | None = None
    theme: ThemeSettings = field(default_factory=ThemeSettings)


def _settings_defaults() -> dict[str, Any]:
    """Default settings values."""
    return {
        "messageTimeout": 5.0,
        "quitTimes": 3,
        "logLevel": "warning",
        "logFile": None,
        "theme": {
            "match": "#d3d3d3",
            "selectedMatch": "#ffff99",
            "selection": "#3a5fcd",
        },
    }


# --- Deep merge ---


def deep_merge_settings(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge overrides into base settings.

    For nested dicts, merge recursively. For primitives and arrays,
    override value wins completely.
    """
    result = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge_settings(result[key], value)
        else:
            result[key] = value
    return result


# --- Loading ---


def _load_from_file(path: Path) -> dict[str, Any]:
    """Load settings from a JSON file; a missing or malformed file yields ``{}``."""
    if not path.exists():
        return {}
    try:
        settings = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning("Ignoring settings file %s: %s", path, e)
        return {}
    if not isinstance(settings, dict):
        logger.warning("Ignoring settings file %s: not a JSON object", path)
        return {}
    return settings


def _to_settings(raw: dict[str, Any]) -> Settings:
    defaults = Settings()
    theme_raw = raw.get("theme") if isinstance(raw.get("theme"), dict) else {}
    theme = ThemeSettings(
        match=str(theme_raw.get("match", defaults.theme.match)),
        selected_match=str(theme_raw.get("selectedMatch", defaults.theme.selected_match)),
        selection=str(theme_raw.get("selection", defaults.theme.selection)),
    )
    try:
        message_timeout = float(raw.get("messageTimeout", defaults.message_timeout))
        quit_times = int(raw.get("quitTimes", defaults.quit_times))
    except (TypeError, ValueError) as e:
        logger.warning("Invalid numeric setting, using defaults: %s", e)
        message_timeout, quit_times = defaults.message_timeout, defaults.quit_times
    log_file = raw.get("logFile")
    return Settings(
        message_timeout=max(message_timeout, 0.0),
        quit_times=max(quit_times, 0),
        log_level=str(raw.get("logLevel", defaults.log_level)),
        log_file=str(log_file) if log_file else None,
        theme=theme,
    )


def load_settings(
    cwd: str | os.PathLike[str] | None = None,
    home: str | os.PathLike[str] | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load and merge the global, project and override settings."""
    home_dir = Path(home) if home is not None else Path(os.path.expanduser("~"))
    cwd_dir = Path(cwd) if cwd is not None else Path.cwd()

    merged = _settings_defaults()
    merged = deep_merge_settings(merged, _load_from_file(home_dir / CONFIG_DIR_NAME / "settings.json"))
    merged = deep_merge_settings(merged, _load_from_file(cwd_dir / CONFIG_DIR_NAME / "settings.json"))
    env_log_file = os.environ.get(LOG_FILE_ENV)
    if env_log_file:
        merged["logFile"] = env_log_file
    if overrides:
        merged = deep_merge_settings(merged, overrides)
    return _to_settings(merged)
