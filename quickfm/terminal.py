"""Terminal control helpers for the TUI session.

Owns the raw-mode lifecycle, alternate-screen switching, and cursor
visibility, plus the live terminal size query used for resize detection.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty

ENTER_TUI_SEQUENCE = b"\x1b[?1049h\x1b[?25l"
EXIT_TUI_SEQUENCE = b"\x1b[?25h\x1b[?1049l"


def terminal_size() -> tuple[int, int]:
    """Return live ``(columns, lines)``, defaulting to 80x24 when unknown."""
    size = shutil.get_terminal_size((80, 24))
    return size.columns, size.lines


class TerminalController:
    """Manage raw/alternate-screen mode transitions for one tty."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._tui_active = False

    @property
    def tui_active(self) -> bool:
        return self._tui_active

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        # Raw mode also turns off IXON, so Ctrl+S/Ctrl+Q reach the app.
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_TUI_SEQUENCE)
        self._tui_active = True

    def disable_tui_mode(self) -> None:
        """Show the cursor, leave the alternate screen, and restore tty state.

        Does nothing when TUI mode is not active, so callers may restore twice.
        """
        if not self.tui_active:
            return
        os.write(self.stdout_fd, EXIT_TUI_SEQUENCE)
        self._tui_active = False
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
