"""Command-line front door for quickfm.

Checks for an interactive terminal, loads config and hotkeys, then runs the
session inside raw alternate-screen mode.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .clipboard import copy_to_clipboard
from .config import load_app_config
from .editor import launch_editor, resolve_editor_command
from .hotkeys import DEFAULT_HOTKEYS, HotkeyTable
from .input import read_key
from .logs import configure_logging
from .screen import Screen
from .session import Session, SessionCallbacks
from .terminal import TerminalController, terminal_size

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    return argparse.ArgumentParser(
        prog="quickfm",
        description="Browse and manage files in a three-pane terminal UI driven by configurable hotkeys.",
    )


def main(argv: list[str] | None = None) -> int:
    """Run the interactive file manager; returns the process exit status.

    The session starts in the current working directory. Exit status is 0
    after the Exit action and 1 when stdin/stdout is not a terminal.
    """
    build_parser().parse_args(argv)
    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        print("quickfm: an interactive terminal is required.", file=sys.stderr)
        return 1

    log_path = configure_logging()
    config = load_app_config()
    hotkeys = HotkeyTable.from_bindings(config.hotkeys or DEFAULT_HOTKEYS)
    logger.info("Starting with %d hotkeys, logging to %s", len(hotkeys), log_path)

    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    editor_command = resolve_editor_command(config.editor)

    def open_in_editor(path: Path, cwd: Path) -> str | None:
        return launch_editor(
            path,
            editor_command,
            terminal.disable_tui_mode,
            terminal.enable_tui_mode,
            cwd=cwd,
        )

    callbacks = SessionCallbacks(
        read_key=lambda timeout_ms: read_key(stdin_fd, timeout_ms),
        terminal_size=terminal_size,
        open_in_editor=open_in_editor,
        copy_to_clipboard=copy_to_clipboard,
    )
    columns, lines = terminal_size()
    session = Session(config, hotkeys, callbacks, Screen(columns, lines), Path.cwd())
    with terminal.raw_mode():
        return session.run()
