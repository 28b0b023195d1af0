"""ANSI-aware text measurement and row shaping.

Pane rows may carry SGR color codes (syntax-highlighted previews). These
helpers clip and pad by display columns so color codes never count toward a
pane's width. Any other escape or control byte is neutralized so text taken
from file names or file contents cannot move the cursor or clear the screen.
"""

from __future__ import annotations

import re
import unicodedata

SGR_RE = re.compile(r"\x1b\[[0-9;]*m")
TAB_STOP = 8
SGR_RESET = "\033[0m"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group()):02x}", source)


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, other control characters are never
    drawn, combining marks consume no columns, and East Asian wide/fullwidth
    characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if not ch.isprintable() or unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    return SGR_RE.sub("", text)


def display_width(text: str) -> int:
    """Return the number of terminal columns ``text`` occupies."""
    col = 0
    for ch in strip_ansi(text):
        col += char_display_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    SGR color codes are kept and do not count toward width. Tabs become
    spaces up to the next stop. Every other control character, including the
    ESC of a non-color sequence, is dropped.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    pos = 0
    while pos < len(text) and col < max_cols:
        sgr = SGR_RE.match(text, pos)
        if sgr:
            out.append(sgr.group(0))
            pos = sgr.end()
            continue
        ch = text[pos]
        pos += 1
        if ch != "\t" and not ch.isprintable():
            continue
        w = char_display_width(ch, col)
        if col + w > max_cols:
            break
        out.append(" " * w if ch == "\t" else ch)
        col += w

    return "".join(out)


def fit_to_width(text: str | None, width: int) -> str:
    """Pad or truncate ``text`` to exactly ``width`` display columns.

    Styled text is closed with a reset before padding so trailing blanks are
    never painted in the row's color.
    """
    if width <= 0:
        return ""
    clipped = clip_ansi_line(text or "", width)
    used = display_width(clipped)
    if "\x1b" in clipped:
        clipped += SGR_RESET
    return clipped + " " * max(0, width - used)
