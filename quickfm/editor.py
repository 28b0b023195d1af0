"""Editor launch helper for opening files from the browser.

Runs the configured editor (or ``$EDITOR``) while temporarily leaving
raw/alternate-screen TUI mode. Returns an error message string instead of
raising for UI-friendly handling.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from pathlib import Path
from typing import Callable

logger = logging.getLogger(__name__)

DEFAULT_EDITOR = "nano"


def resolve_editor_command(configured: str | None) -> list[str]:
    """Return the editor argv prefix: config, then ``$EDITOR``, then nano."""
    for candidate in (configured or "", os.environ.get("EDITOR", ""), DEFAULT_EDITOR):
        candidate = candidate.strip()
        if candidate:
            return shlex.split(candidate)
    return []


def launch_editor(
    target: Path,
    editor_command: list[str],
    disable_tui_mode: Callable[[], None],
    enable_tui_mode: Callable[[], None],
    cwd: Path | None = None,
) -> str | None:
    """Open ``target`` in the editor and block until it exits."""
    if not editor_command:
        return "Cannot edit: no editor configured and $EDITOR is not set."

    disable_tui_mode()
    try:
        completed = subprocess.run([*editor_command, str(target)], check=False, cwd=cwd)
    except Exception as exc:
        logger.error("Failed to launch editor %s: %s", editor_command[0], exc)
        return f"Failed to launch editor: {exc}"
    finally:
        enable_tui_mode()
    if completed.returncode != 0:
        logger.info("Editor exited with status %s for %s", completed.returncode, target)
    return None
