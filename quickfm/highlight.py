"""Syntax-highlighted file previews for the log pane.

Neutralizes terminal control bytes first, then colors the text with
Pygments' terminal formatter.
"""

from __future__ import annotations

from pathlib import Path

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.util import ClassNotFound

from .ansi import sanitize_terminal_text

PREVIEW_LINE_LIMIT = 40

_FORMATTER = TerminalFormatter()


def lexer_for(path: Path, source: str):
    try:
        return get_lexer_for_filename(path.name, source, stripnl=False)
    except ClassNotFound:
        return TextLexer(stripnl=False)


def highlight_preview(path: Path, lines: list[str], limit: int = PREVIEW_LINE_LIMIT) -> list[str]:
    """Return the first ``limit`` lines of ``lines`` colored for ``path``'s language."""
    head = [sanitize_terminal_text(line) for line in lines[:limit]]
    if not head:
        return []
    source = "\n".join(head) + "\n"
    rendered = highlight(source, lexer_for(path, source), _FORMATTER)
    out = rendered.split("\n")
    if out and out[-1] == "":
        out.pop()
    return out
