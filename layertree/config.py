"""Persistent JSON config helpers.

Stores the deletion cleanup policy, the default root name, and the JSON
highlight style. Malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "layertree"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_ROOT_NAME = "Layer"
DEFAULT_HIGHLIGHT_STYLE = "monokai"


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
    """Persist config data as pretty-printed JSON; filesystem errors are ignored."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def _load_nonempty_str(key: str, default: str) -> str:
    value = load_config().get(key)
    if not isinstance(value, str):
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _save_nonempty_str(key: str, value: str) -> None:
    stripped = str(value).strip()
    if not stripped:
        return
    config = load_config()
    config[key] = stripped
    save_config(config)


def load_purge_deleted_subtrees() -> bool:
    """Return whether deletion purges flags of removed descendants.

    Only explicit booleans are accepted; anything else means ``True``.
    """
    value = load_config().get("purge_deleted_subtrees")
    return value if isinstance(value, bool) else True


def save_purge_deleted_subtrees(purge: bool) -> None:
    config = load_config()
    config["purge_deleted_subtrees"] = bool(purge)
    save_config(config)


def load_default_root_name() -> str:
    return _load_nonempty_str("default_root_name", DEFAULT_ROOT_NAME)


def save_default_root_name(name: str) -> None:
    _save_nonempty_str("default_root_name", name)


def load_highlight_style() -> str:
    """Load the Pygments style used for JSON dumps."""
    return _load_nonempty_str("highlight_style", DEFAULT_HIGHLIGHT_STYLE)


def save_highlight_style(style: str) -> None:
    _save_nonempty_str("highlight_style", style)
