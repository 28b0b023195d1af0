"""Hotkey table: canonical key strings mapped to named actions.

Built once at startup from ``(action name, key expression)`` pairs taken from
config. Unknown action names are reported and skipped; they never abort
startup.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from enum import Enum

from .keys import canonicalize

logger = logging.getLogger(__name__)

# Flow-control keys that many terminal drivers swallow before the process sees them.
TERMINAL_CAPTURED_KEYS: frozenset[str] = frozenset({"CTRL+S", "CTRL+Q"})


class Action(Enum):
    """Closed set of actions a hotkey can trigger; values are config names."""

    CREATE_FILE = "CreateFile"
    APPEND_FILE = "AppendFile"
    DELETE_FILE = "DeleteFile"
    LIST_FILES = "ListFiles"
    SEARCH_FILES = "SearchFiles"
    READ_FILE = "ReadFile"
    EXIT = "Exit"
    OPEN_IN_EDITOR = "OpenInEditor"
    JUMP_TO_DEFAULT = "JumpToDefault"
    ADD_BOOKMARK = "AddBookmark"
    CYCLE_BOOKMARKS = "CycleBookmarks"
    BATCH_DELETE = "BatchDelete"
    BATCH_RENAME = "BatchRename"
    BATCH_MOVE = "BatchMove"
    QUICK_PREVIEW = "QuickPreview"
    MULTI_FILE_SEARCH = "MultiFileSearch"
    FILTER_BY_SIZE = "FilterBySize"
    FILTER_BY_DATE = "FilterByDate"
    FILE_INFO = "FileInfo"
    COPY_FILE_PATH = "CopyFilePath"
    PASTE_FILE = "PasteFile"
    CREATE_FROM_TEMPLATE = "CreateFromTemplate"
    APPEND_SNIPPET = "AppendSnippet"
    CHANGE_DIRECTORY = "ChangeDirectory"
    GO_BACK_DIRECTORY = "GoBackDirectory"

    @classmethod
    def from_name(cls, name: str) -> Action | None:
        """Resolve a config action name (exact spelling) to an ``Action``."""
        for action in cls:
            if action.value == name:
                return action
        return None


DEFAULT_HOTKEYS: tuple[tuple[str, str], ...] = (
    ("CreateFile", "Ctrl+N"),
    ("ReadFile", "Ctrl+R"),
    ("AppendFile", "Ctrl+A"),
    ("DeleteFile", "Ctrl+D"),
    ("SearchFiles", "Ctrl+F"),
    ("OpenInEditor", "Ctrl+O"),
    ("ChangeDirectory", "Ctrl+G"),
    ("GoBackDirectory", "Ctrl+B"),
    ("QuickPreview", "Ctrl+P"),
    ("FileInfo", "Ctrl+T"),
    ("Exit", "Ctrl+E"),
)


class HotkeyTable:
    """Exact-match dispatch table from canonical key strings to actions."""

    def __init__(self, normalize: Callable[[str], str] = canonicalize) -> None:
        self._normalize = normalize
        self._actions: dict[str, Action] = {}

    @classmethod
    def from_bindings(cls, bindings: Iterable[tuple[str, str]]) -> HotkeyTable:
        """Build a table from raw ``(action name, key expression)`` pairs.

        Pairs with an empty side are skipped. Unknown action names are logged
        as warnings. A later binding for an already-bound key replaces the
        earlier one.
        """
        table = cls()
        for raw_action, raw_key in bindings:
            action_name = (raw_action or "").strip()
            key = table._normalize(raw_key or "")
            if not action_name or not key:
                continue
            action = Action.from_name(action_name)
            if action is None:
                logger.warning("Unknown hotkey action: %s", action_name)
                continue
            table.register(key, action)
        return table

    def register(self, key: str, action: Action) -> None:
        canonical = self._normalize(key)
        previous = self._actions.get(canonical)
        if previous is not None and previous is not action:
            logger.warning("Hotkey %s rebound from %s to %s", canonical, previous.value, action.value)
        self._actions[canonical] = action

    def lookup(self, canonical_key: str) -> Action | None:
        return self._actions.get(canonical_key)

    def bindings(self) -> list[tuple[str, Action]]:
        return list(self._actions.items())

    def help_lines(self) -> list[str]:
        """Return hotkey-pane rows describing every registered binding."""
        bindings = self.bindings()
        if not bindings:
            return ["  (No hotkeys configured.)"]
        return [f"  {key} : {action.value}" for key, action in bindings]

    def __len__(self) -> int:
        return len(self._actions)
