"""System clipboard writes through whichever platform tool is installed."""

from __future__ import annotations

import shutil
import subprocess
import sys

CLIPBOARD_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
    ("pbcopy",),
    ("clip",),
)


def available_clipboard_command() -> tuple[str, ...] | None:
    commands = CLIPBOARD_COMMANDS
    if sys.platform == "darwin":
        commands = (("pbcopy",),)
    elif sys.platform.startswith("win"):
        commands = (("clip",),)
    for command in commands:
        if shutil.which(command[0]):
            return command
    return None


def copy_to_clipboard(text: str) -> str | None:
    """Copy ``text`` to the system clipboard; returns an error message on failure."""
    command = available_clipboard_command()
    if command is None:
        return "No clipboard tool found (install wl-copy, xclip, or xsel)."
    try:
        subprocess.run(
            list(command),
            input=text.encode("utf-8"),
            check=True,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            timeout=5,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        return f"{command[0]} failed: {exc}"
    return None
