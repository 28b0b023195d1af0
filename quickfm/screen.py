"""Buffered terminal screen with a single bounds-checked draw primitive.

Every positioned write goes through ``Screen.draw_region`` which clips to the
live terminal size and shapes each row to an exact width. Output is collected
and emitted in one write per ``flush``.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Callable
from enum import Enum

from .ansi import SGR_RESET, fit_to_width


class Style(Enum):
    """Visual treatments for drawn rows, valued by their SGR parameters."""

    NORMAL = ""
    SELECTED = "7"
    HEADER = "1"
    DIVIDER = "2"


def write_stdout(text: str) -> None:
    os.write(sys.stdout.fileno(), text.encode("utf-8", errors="replace"))


def styled(text: str, style: Style) -> str:
    """Wrap ``text`` in ``style`` while keeping embedded colors intact."""
    if not style.value or not text:
        return text
    sgr = f"\033[{style.value}m"
    # Keep the row style active across resets inside highlighted text.
    return sgr + text.replace(SGR_RESET, f"\033[0;{style.value}m") + SGR_RESET


class Screen:
    """Accumulates cursor-addressed writes for one frame."""

    def __init__(
        self,
        columns: int,
        lines: int,
        write: Callable[[str], None] = write_stdout,
    ) -> None:
        self.columns = columns
        self.lines = lines
        self._write = write
        self._out: list[str] = []

    def resize(self, columns: int, lines: int) -> bool:
        """Track the live terminal size; returns whether it changed."""
        if (columns, lines) == (self.columns, self.lines):
            return False
        self.columns = columns
        self.lines = lines
        return True

    def clear(self) -> None:
        self._out.append("\033[H\033[2J")

    def draw_region(
        self,
        x: int,
        y: int,
        width: int,
        height: int,
        text: str = "",
        style: Style = Style.NORMAL,
    ) -> None:
        """Paint ``text`` into the rectangle at ``(x, y)``.

        ``text`` is split on newlines, one line per row; rows without text are
        blanked. Each row is padded or truncated to the region width, and any
        part of the region outside the terminal is skipped.
        """
        if x < 0 or x >= self.columns or width <= 0 or height <= 0:
            return
        width = min(width, self.columns - x)
        rows = text.split("\n") if text else []
        for offset in range(height):
            row = y + offset
            if row < 0 or row >= self.lines:
                continue
            line = rows[offset] if offset < len(rows) else ""
            self._out.append(f"\033[{row + 1};{x + 1}H")
            self._out.append(styled(fit_to_width(line, width), style))

    def draw_text(self, x: int, y: int, width: int, text: str, style: Style = Style.NORMAL) -> None:
        self.draw_region(x, y, width, 1, text, style)

    def move_cursor(self, x: int, y: int) -> None:
        x = max(0, min(x, self.columns - 1))
        y = max(0, min(y, self.lines - 1))
        self._out.append(f"\033[{y + 1};{x + 1}H")

    def set_cursor_visible(self, visible: bool) -> None:
        self._out.append("\033[?25h" if visible else "\033[?25l")

    def flush(self) -> None:
        if not self._out:
            return
        payload = "".join(self._out)
        self._out.clear()
        self._write(payload)
