"""Regression tests for raw-key decoding.

Covers ESC timing, CSI sequences with modifiers, and control-byte mapping.
These tests protect interactive input handling in raw terminal mode.
"""

import os
import time
import unittest

from quickfm import input as input_mod
from quickfm.keys import KeyEvent


class ReadKeyRegressionTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def _read(self, payload: bytes) -> KeyEvent | None:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, payload)
            return input_mod.read_key(read_fd, timeout_ms=20)
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_single_escape_returns_escape_without_second_keypress(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, b"\x1b")
            started = time.monotonic()
            key = input_mod.read_key(read_fd, timeout_ms=20)
            elapsed = time.monotonic() - started
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(key, KeyEvent("ESCAPE"))
        self.assertLess(elapsed, 0.2)

    def test_timeout_without_input_returns_none(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            key = input_mod.read_key(read_fd, timeout_ms=10)
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertIsNone(key)

    def test_arrow_and_navigation_sequences(self) -> None:
        self.assertEqual(self._read(b"\x1b[A"), KeyEvent("UP"))
        self.assertEqual(self._read(b"\x1b[B"), KeyEvent("DOWN"))
        self.assertEqual(self._read(b"\x1b[5~"), KeyEvent("PAGEUP"))
        self.assertEqual(self._read(b"\x1b[6~"), KeyEvent("PAGEDOWN"))
        self.assertEqual(self._read(b"\x1b[H"), KeyEvent("HOME"))
        self.assertEqual(self._read(b"\x1bOF"), KeyEvent("END"))

    def test_xterm_modifier_parameter_sets_flags(self) -> None:
        self.assertEqual(self._read(b"\x1b[1;5A"), KeyEvent("UP", ctrl=True))
        self.assertEqual(self._read(b"\x1b[3;2~"), KeyEvent("DELETE", shift=True))
        self.assertEqual(self._read(b"\x1b[Z"), KeyEvent("TAB", shift=True))

    def test_control_bytes_map_to_ctrl_letters(self) -> None:
        self.assertEqual(self._read(b"\x05"), KeyEvent("e", ctrl=True))
        self.assertEqual(self._read(b"\x18"), KeyEvent("x", ctrl=True))
        self.assertEqual(self._read(b"\r"), KeyEvent("ENTER"))
        self.assertEqual(self._read(b"\t"), KeyEvent("TAB"))
        self.assertEqual(self._read(b"\x7f"), KeyEvent("BACKSPACE"))

    def test_printable_bytes_and_utf8(self) -> None:
        self.assertEqual(self._read(b"a"), KeyEvent("a"))
        self.assertEqual(self._read(b"A"), KeyEvent("A", shift=True))
        self.assertEqual(self._read(b" "), KeyEvent("SPACE"))
        self.assertEqual(self._read("é".encode("utf-8")), KeyEvent("é"))

    def test_escape_prefix_becomes_alt(self) -> None:
        self.assertEqual(self._read(b"\x1ba"), KeyEvent("a", alt=True))

    def test_double_escape_yields_two_escape_events(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, b"\x1b\x1b")
            first = input_mod.read_key(read_fd, timeout_ms=20)
            second = input_mod.read_key(read_fd, timeout_ms=20)
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(first, KeyEvent("ESCAPE"))
        self.assertEqual(second, KeyEvent("ESCAPE"))


if __name__ == "__main__":
    unittest.main()
