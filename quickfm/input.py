"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into ``KeyEvent`` values.
Handles ESC-sequence timing, xterm modifier parameters, and Alt-prefixed keys.
"""

from __future__ import annotations

import os
import select

from .keys import KeyEvent

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CSI_FINAL_KEYS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
    b"P": "F1",
    b"Q": "F2",
    b"R": "F3",
    b"S": "F4",
}

_CSI_TILDE_KEYS = {
    1: "HOME",
    2: "INSERT",
    3: "DELETE",
    4: "END",
    5: "PAGEUP",
    6: "PAGEDOWN",
    7: "HOME",
    8: "END",
    11: "F1",
    12: "F2",
    13: "F3",
    14: "F4",
    15: "F5",
    17: "F6",
    18: "F7",
    19: "F8",
    20: "F9",
    21: "F10",
    23: "F11",
    24: "F12",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _with_modifier_param(key: str, param: int) -> KeyEvent:
    """Apply an xterm modifier parameter (``1 + bitmask``) to ``key``."""
    mask = max(0, param - 1)
    return KeyEvent(key, ctrl=bool(mask & 4), shift=bool(mask & 1), alt=bool(mask & 2))


def _decode_plain_byte(ch: bytes, fd: int) -> KeyEvent:
    if ch == b"\r":
        return KeyEvent("ENTER")
    if ch == b"\t":
        return KeyEvent("TAB")
    if ch in {b"\x08", b"\x7f"}:
        return KeyEvent("BACKSPACE")
    if ch == b"\x00":
        return KeyEvent("SPACE", ctrl=True)
    code = ch[0]
    if 1 <= code <= 26:
        return KeyEvent(chr(ord("a") + code - 1), ctrl=True)
    if code < 0x20:
        return KeyEvent(chr(code + 0x40), ctrl=True)
    if code >= 0x80:
        # Collect the rest of a UTF-8 sequence.
        needed = 1 if code >= 0xC0 else 0
        if code >= 0xE0:
            needed = 2
        if code >= 0xF0:
            needed = 3
        data = ch
        for _ in range(needed):
            more = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
            if more is None:
                break
            data += more
        return KeyEvent(data.decode("utf-8", errors="replace"))
    text = ch.decode("ascii")
    if text == " ":
        return KeyEvent("SPACE")
    return KeyEvent(text, shift=text.isalpha() and text.isupper())


def _decode_csi(fd: int) -> KeyEvent:
    params = b""
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return KeyEvent("ESCAPE")
        if part.isdigit() or part == b";":
            params += part
            if len(params) > 16:
                return KeyEvent("ESCAPE")
            continue
        final = part
        break

    fields = [int(field) for field in params.decode("ascii").split(";") if field]
    if final == b"~":
        if not fields or fields[0] not in _CSI_TILDE_KEYS:
            return KeyEvent("ESCAPE")
        key = _CSI_TILDE_KEYS[fields[0]]
        if len(fields) >= 2:
            return _with_modifier_param(key, fields[1])
        return KeyEvent(key)
    if final == b"Z":
        return KeyEvent("TAB", shift=True)
    key = _CSI_FINAL_KEYS.get(final)
    if key is None:
        return KeyEvent("ESCAPE")
    if len(fields) >= 2:
        return _with_modifier_param(key, fields[1])
    return KeyEvent(key)


def read_key(fd: int, timeout_ms: int | None = None) -> KeyEvent | None:
    """Read one key press from ``fd``.

    Returns ``None`` when ``timeout_ms`` elapses without input or the stream
    is closed.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return None

        ch = os.read(fd, 1)
        if not ch:
            return None

    if ch != b"\x1b":
        return _decode_plain_byte(ch, fd)

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return KeyEvent("ESCAPE")
    if seq == b"[":
        return _decode_csi(fd)
    if seq == b"O":
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return KeyEvent("ESCAPE")
        key = _CSI_FINAL_KEYS.get(final)
        return KeyEvent(key) if key is not None else KeyEvent("ESCAPE")
    if seq == b"\x1b":
        _PENDING_BYTES.append(seq)
        return KeyEvent("ESCAPE")
    inner = _decode_plain_byte(seq, fd)
    if inner.key in {"ENTER", "TAB", "BACKSPACE", "SPACE"} or inner.is_printable or inner.ctrl:
        return KeyEvent(inner.key, ctrl=inner.ctrl, shift=inner.shift, alt=True)
    _PENDING_BYTES.append(seq)
    return KeyEvent("ESCAPE")
