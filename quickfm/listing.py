"""Directory listing model: entries, selection, and scroll offset.

Holds the invariant that the selected row is always inside the viewport:
``scroll_offset <= selected_index < scroll_offset + viewport_height`` and
``0 <= scroll_offset <= max(0, len(entries) - viewport_height)``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from .filesystem import EntryDescriptor

if TYPE_CHECKING:
    from .filesystem import FileService
    from .log_buffer import LogBuffer

logger = logging.getLogger(__name__)


def access_error_entry(directory: Path, reason: str) -> EntryDescriptor:
    return EntryDescriptor(directory, is_dir=False, synthetic=True, message=f"Access denied: {reason}")


class DirectoryListing:
    def __init__(self, directory: Path) -> None:
        self.directory = directory
        self.entries: list[EntryDescriptor] = []
        self.selected_index: int | None = None
        self.scroll_offset = 0

    def load(self, directory: Path, filesystem: FileService) -> None:
        """Replace entries with ``directory``'s children and reset selection.

        Enumeration failures never propagate; they yield a single synthetic
        row describing the error.
        """
        self.directory = directory
        try:
            self.entries = filesystem.list_entries(directory)
        except OSError as exc:
            logger.warning("Cannot list %s: %s", directory, exc)
            self.entries = [access_error_entry(directory, exc.strerror or str(exc))]
        self.selected_index = 0 if self.entries else None
        self.scroll_offset = 0

    def reload(self, filesystem: FileService, viewport_height: int) -> None:
        """Re-enumerate the current directory, keeping the selection where possible."""
        previous = self.selected_entry()
        previous_index = self.selected_index or 0
        previous_offset = self.scroll_offset
        self.load(self.directory, filesystem)
        if not self.entries:
            return
        index = min(previous_index, len(self.entries) - 1)
        if previous is not None:
            for idx, entry in enumerate(self.entries):
                if entry.path == previous.path and not entry.synthetic:
                    index = idx
                    break
        self.selected_index = index
        self.scroll_offset = previous_offset
        self.reconcile_viewport(viewport_height)

    def selected_entry(self) -> EntryDescriptor | None:
        if self.selected_index is None or not self.entries:
            return None
        return self.entries[self.selected_index]

    def move_selection(self, delta: int) -> None:
        if not self.entries:
            return
        current = self.selected_index or 0
        self.selected_index = max(0, min(current + delta, len(self.entries) - 1))

    def jump_home(self) -> None:
        if self.entries:
            self.selected_index = 0

    def jump_end(self) -> None:
        if self.entries:
            self.selected_index = len(self.entries) - 1

    def page_move(self, viewport_height: int, direction: int) -> None:
        step = max(1, viewport_height - 1)
        self.move_selection(step if direction > 0 else -step)

    def reconcile_viewport(self, viewport_height: int) -> None:
        """Scroll just enough to keep the selection visible, then clamp.

        Never re-centers: the offset only moves when the selection would
        otherwise fall outside the viewport.
        """
        viewport_height = max(1, viewport_height)
        if not self.entries:
            self.selected_index = None
            self.scroll_offset = 0
            return

        index = max(0, min(self.selected_index or 0, len(self.entries) - 1))
        self.selected_index = index
        if index < self.scroll_offset:
            self.scroll_offset = index
        elif index >= self.scroll_offset + viewport_height:
            self.scroll_offset = index - viewport_height + 1
        max_offset = max(0, len(self.entries) - viewport_height)
        self.scroll_offset = max(0, min(self.scroll_offset, max_offset))

    def visible_entries(self, viewport_height: int) -> list[EntryDescriptor]:
        return self.entries[self.scroll_offset : self.scroll_offset + max(0, viewport_height)]

    def activate(
        self,
        filesystem: FileService,
        open_in_editor: Callable[[Path], str | None],
        log: LogBuffer,
    ) -> bool:
        """Enter the selected directory or open the selected file.

        Returns ``True`` when the listing moved to a new directory. Either way
        one result line is appended to ``log``.
        """
        entry = self.selected_entry()
        if entry is None or entry.synthetic:
            log.append("Nothing to open.")
            return False
        if entry.is_dir:
            if not filesystem.is_directory(entry.path):
                log.append(f"Failed to cd: directory no longer exists: {entry.path}")
                return False
            self.load(entry.path, filesystem)
            log.append(f"Changed directory to: {entry.path}")
            return True

        error = open_in_editor(entry.path)
        if error:
            log.append(f"Open failed: {error}")
        else:
            log.append(f"Opened: {entry.path}")
        return False
