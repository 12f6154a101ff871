"""Persistent JSON config helpers.

Stores the directory creation mode used by ``mkdir``/``cp``, the CLI log
level, and the highlight style for ``cat``. All access is defensive:
malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "filehandle"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

DEFAULT_DIR_MODE = 0o777
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_HIGHLIGHT_STYLE = "monokai"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


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


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Write failures are logged and otherwise ignored; a read-only config
    location must not break file operations.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logging.getLogger(__name__).debug("could not save config to %s: %s", CONFIG_PATH, exc)


def load_dir_mode() -> int:
    """Return the permission bits for new directories.

    Booleans, non-integers and values outside ``0..0o7777`` fall back to
    ``0o777``.
    """
    value = load_config().get("dir_mode")
    if isinstance(value, bool) or not isinstance(value, int):
        return DEFAULT_DIR_MODE
    if value < 0 or value > 0o7777:
        return DEFAULT_DIR_MODE
    return value


def save_dir_mode(mode: int) -> None:
    if isinstance(mode, bool) or not 0 <= int(mode) <= 0o7777:
        return
    config = load_config()
    config["dir_mode"] = int(mode)
    save_config(config)


def load_log_level() -> str:
    """Return a standard level name, case-insensitively matched."""
    value = load_config().get("log_level")
    if not isinstance(value, str):
        return DEFAULT_LOG_LEVEL
    normalized = value.strip().upper()
    return normalized if normalized in _LOG_LEVELS else DEFAULT_LOG_LEVEL


def save_log_level(level: str) -> None:
    normalized = str(level).strip().upper()
    if normalized not in _LOG_LEVELS:
        return
    config = load_config()
    config["log_level"] = normalized
    save_config(config)


def load_highlight_style() -> str:
    """Load the Pygments style name used by ``cat --highlight``."""
    value = load_config().get("highlight_style")
    if not isinstance(value, str):
        return DEFAULT_HIGHLIGHT_STYLE
    stripped = value.strip()
    return stripped if stripped else DEFAULT_HIGHLIGHT_STYLE


def save_highlight_style(style: str) -> None:
    stripped = str(style).strip()
    if not stripped:
        return
    config = load_config()
    config["highlight_style"] = stripped
    save_config(config)
