"""Persistent JSON config helpers.

Reads extra application directories, icon lookup preferences, log level, and
launch behavior. All access is defensive: malformed or missing config falls
back to defaults.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "astatine"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_ICON_SIZE = 32


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def load_application_dirs() -> list[Path]:
    """Extra ``applications`` directories searched before the XDG defaults.

    Non-string and blank entries are dropped; ``~`` is expanded.
    """
    value = load_config().get("application_dirs")
    if not isinstance(value, list):
        return []
    dirs: list[Path] = []
    for raw in value:
        if not isinstance(raw, str) or not raw.strip():
            continue
        dirs.append(Path(raw.strip()).expanduser())
    return dirs


def _load_stripped_string(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_icon_theme() -> str | None:
    """Load the preferred icon theme name, returning ``None`` when unset/invalid."""
    return _load_stripped_string("icon_theme")


def load_icon_size() -> int:
    """Return the icon size in pixels; booleans and non-positive values fall back to 32."""
    value = load_config().get("icon_size")
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return DEFAULT_ICON_SIZE
    return value


def load_log_level() -> str | None:
    level = _load_stripped_string("log_level")
    return level.upper() if level else None


def load_close_on_launch() -> bool:
    """Whether the launcher exits after a successful launch (default ``True``)."""
    value = load_config().get("close_on_launch")
    return value if isinstance(value, bool) else True
