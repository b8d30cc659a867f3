"""Read-only JSON user preferences.

Stores the UI theme, the quick-step size, and logging options.
Missing or malformed config falls back to defaults.
Browsing state is never written back.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from .explorer import QUICK_SELECT_AMOUNT

APP_NAME = "pathpick"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH


def load_config() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _load_str(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_theme_name() -> str | None:
    """Load configured UI theme name, returning ``None`` when unset/invalid."""
    return _load_str("theme")


def load_quick_step() -> int:
    """Return the shift+arrow selection step.

    Booleans, non-integers, and values below 1 fall back to the default.
    """
    value = load_config().get("quick_step")
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return QUICK_SELECT_AMOUNT
    return value


def load_log_file() -> Path | None:
    raw = _load_str("log_file")
    return Path(raw).expanduser() if raw is not None else None


def load_log_level() -> int | None:
    """Return a ``logging`` level from the config name, or ``None`` when unset/unknown."""
    raw = _load_str("log_level")
    if raw is None:
        return None
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else None


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_CONFIG_PATH",
    "load_config",
    "load_log_file",
    "load_log_level",
    "load_quick_step",
    "load_theme_name",
]
