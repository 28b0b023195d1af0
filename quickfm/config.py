"""Persistent JSON config helpers.

Supplies hotkey bindings, the default directory, the editor command,
bookmarks, and named templates/snippets. All access is defensive: malformed
or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "qfm"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
LEGACY_CONFIG_PATH = Path.home() / ".config" / APP_NAME / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH


def _load_config_path() -> Path:
    """Return preferred config path, falling back to legacy location when needed."""
    if CONFIG_PATH.exists():
        return CONFIG_PATH
    if CONFIG_PATH == DEFAULT_CONFIG_PATH and LEGACY_CONFIG_PATH.exists():
        return LEGACY_CONFIG_PATH
    return CONFIG_PATH


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = _load_config_path()
    if not config_path.exists():
        return {}
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", config_path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level is not an object", config_path)
        return {}
    return data


def _lookup(data: dict[str, object], key: str) -> object:
    """Fetch ``key`` from ``data`` ignoring case."""
    wanted = key.casefold()
    for name, value in data.items():
        if isinstance(name, str) and name.casefold() == wanted:
            return value
    return None


def _string_pairs(value: object, key: str) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        logger.warning("Config %s must be an object; ignoring it", key)
        return {}
    pairs: dict[str, str] = {}
    for name, item in value.items():
        if isinstance(name, str) and isinstance(item, str):
            pairs[name] = item
        else:
            logger.warning("Config %s entry %r is not a string; ignoring it", key, name)
    return pairs


def _string(value: object, key: str, default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str) or not value.strip():
        logger.warning("Config %s must be a non-empty string; using %r", key, default)
        return default
    return value


def _string_list(value: object, key: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        logger.warning("Config %s must be a list; ignoring it", key)
        return []
    return [item for item in value if isinstance(item, str) and item.strip()]


@dataclass
class AppConfig:
    hotkeys: tuple[tuple[str, str], ...] = ()
    default_directory: str = "."
    editor: str = ""
    bookmarks: list[str] = field(default_factory=list)
    templates: dict[str, str] = field(default_factory=dict)
    snippets: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: dict[str, object]) -> AppConfig:
        """Build config from a decoded JSON object; top-level keys ignore case."""
        return cls(
            hotkeys=tuple(_string_pairs(_lookup(data, "hotkeys"), "hotkeys").items()),
            default_directory=_string(_lookup(data, "defaultDirectory"), "defaultDirectory", "."),
            editor=_string(_lookup(data, "editor"), "editor", ""),
            bookmarks=_string_list(_lookup(data, "bookmarks"), "bookmarks"),
            templates=_string_pairs(_lookup(data, "templates"), "templates"),
            snippets=_string_pairs(_lookup(data, "snippets"), "snippets"),
        )


def load_app_config() -> AppConfig:
    return AppConfig.from_mapping(load_config())
