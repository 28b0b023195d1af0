"""Canonical key strings for hotkey lookup.

Turns decoded key events into ``CTRL+SHIFT+ALT+KEY`` strings and normalizes
user-written key expressions from config into the same form.
"""

from __future__ import annotations

from dataclasses import dataclass

MODIFIER_ORDER: tuple[str, ...] = ("CTRL", "SHIFT", "ALT")


@dataclass(frozen=True)
class KeyEvent:
    """One key press: a printable character or symbolic key name plus modifiers."""

    key: str
    ctrl: bool = False
    shift: bool = False
    alt: bool = False

    @property
    def is_printable(self) -> bool:
        return len(self.key) == 1 and self.key.isprintable()

    @property
    def text(self) -> str:
        """Return the character this key types into a text field, or ``""``."""
        if self.ctrl or self.alt:
            return ""
        if self.key == "SPACE":
            return " "
        return self.key if self.is_printable else ""


def encode_key(event: KeyEvent) -> str:
    """Build the modifier-prefixed key string for ``event``.

    Modifiers always appear in ``CTRL``, ``SHIFT``, ``ALT`` order. The key part
    is the upper-cased character or symbolic name; an empty key encodes as
    ``UNKNOWN`` so the result is never empty.
    """
    held = {"CTRL": event.ctrl, "SHIFT": event.shift, "ALT": event.alt}
    parts = [name for name in MODIFIER_ORDER if held[name]]
    key = event.key or ""
    if key == " ":
        key = "SPACE"
    parts.append(key.upper() if key else "UNKNOWN")
    return "+".join(parts)


def canonicalize(raw: str | None) -> str:
    """Normalize a key expression such as ``"Control + n"`` to ``"CTRL+N"``."""
    if raw is None or not raw.strip():
        return ""
    text = raw.replace(" ", "").upper()
    return text.replace("CONTROL+", "CTRL+")


def canonical_key(event: KeyEvent) -> str:
    return canonicalize(encode_key(event))
