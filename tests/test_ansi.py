"""Tests for ANSI-aware row shaping.

Rows must be padded or clipped to an exact display width, ignoring escape
sequences and counting wide characters as two cells.
"""

import unittest

from quickfm import ansi as ansi_mod


class FitToWidthTests(unittest.TestCase):
    def test_short_text_is_padded(self) -> None:
        self.assertEqual(ansi_mod.fit_to_width("ab", 5), "ab   ")
        self.assertEqual(ansi_mod.fit_to_width(None, 3), "   ")

    def test_long_text_is_truncated(self) -> None:
        self.assertEqual(ansi_mod.fit_to_width("abcdef", 4), "abcd")

    def test_escape_sequences_do_not_count_toward_width(self) -> None:
        shaped = ansi_mod.fit_to_width("\x1b[31mred\x1b[0m", 5)

        self.assertEqual(ansi_mod.strip_ansi(shaped), "red  ")
        self.assertEqual(ansi_mod.display_width(shaped), 5)

    def test_wide_characters_and_tabs(self) -> None:
        self.assertEqual(ansi_mod.display_width("日本"), 4)
        self.assertEqual(ansi_mod.fit_to_width("日本語", 5), "日本 ")
        self.assertEqual(ansi_mod.fit_to_width("a\tb", 10), "a       b ")

    def test_control_characters_are_dropped(self) -> None:
        self.assertEqual(ansi_mod.fit_to_width("a\x07b", 3), "ab ")

    def test_only_color_sequences_pass_through(self) -> None:
        shaped = ansi_mod.fit_to_width("a\x1b[2Jb\x1b[5;1Hc", 12)

        self.assertNotIn("\x1b", shaped)
        self.assertEqual(shaped, "a[2Jb[5;1Hc ")
        self.assertEqual(ansi_mod.display_width("a\x1b[2Jb"), 5)


if __name__ == "__main__":
    unittest.main()
