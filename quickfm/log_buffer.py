"""Bounded scrollback shown in the log pane."""

from __future__ import annotations

import re
from collections import deque
from collections.abc import Iterator

from .ansi import sanitize_terminal_text

LOG_BUFFER_MAX_LINES = 2000
_LINE_BREAK_RE = re.compile(r"[\r\n]+")


class LogBuffer:
    """Append-only line buffer that evicts the oldest lines past ``max_lines``."""

    def __init__(self, max_lines: int = LOG_BUFFER_MAX_LINES) -> None:
        self.max_lines = max(1, max_lines)
        self._lines: deque[str] = deque(maxlen=self.max_lines)

    def append(self, text: str | None) -> int:
        """Append ``text``, one buffer line per non-empty physical line.

        Control bytes (escape sequences from file names or file contents) are
        shown escaped. Returns the number of lines added.
        """
        return self._extend(text, sanitize_terminal_text)

    def append_styled(self, text: str | None) -> int:
        """Append ``text`` whose SGR color codes must reach the terminal."""
        return self._extend(text, str)

    def _extend(self, text: str | None, shape) -> int:
        if not text:
            return 0
        added = 0
        for line in _LINE_BREAK_RE.split(text):
            if not line:
                continue
            self._lines.append(shape(line))
            added += 1
        return added

    def tail(self, count: int) -> list[str]:
        """Return the newest ``count`` lines, oldest first."""
        if count <= 0:
            return []
        lines = list(self._lines)
        return lines[-count:]

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)
