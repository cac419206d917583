"""Persistent JSON config helpers.

Stores the default branch and the optional result-cache bound.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "repofix"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH
DEFAULT_BRANCH = "main"


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem/serialization errors are logged and otherwise ignored so a
    read-only config directory never breaks a session.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError) as exc:
        logger.warning("could not write config %s: %s", CONFIG_PATH, exc)


def load_default_branch() -> str:
    """Return the persisted default branch, ``"main"`` when unset/invalid."""
    value = load_config().get("default_branch")
    if not isinstance(value, str):
        return DEFAULT_BRANCH
    stripped = value.strip()
    return stripped if stripped else DEFAULT_BRANCH


def save_default_branch(branch: str) -> None:
    """Persist the default branch; blank names are ignored."""
    stripped = str(branch).strip()
    if not stripped:
        return
    config = load_config()
    config["default_branch"] = stripped
    save_config(config)


def load_result_cache_max_entries() -> int | None:
    """Return the result-cache bound, or ``None`` for unbounded caches.

    Only positive integers are accepted; booleans and other types mean
    unbounded.
    """
    value = load_config().get("result_cache_max_entries")
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value > 0 else None


def save_result_cache_max_entries(max_entries: int | None) -> None:
    """Persist the result-cache bound; ``None`` removes it."""
    config = load_config()
    if max_entries is None or max_entries <= 0:
        config.pop("result_cache_max_entries", None)
    else:
        config["result_cache_max_entries"] = int(max_entries)
    save_config(config)
