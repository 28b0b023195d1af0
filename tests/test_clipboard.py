"""Tests for system clipboard writes."""

from __future__ import annotations

import subprocess
import unittest
from unittest import mock

from quickfm.clipboard import copy_to_clipboard


class ClipboardTests(unittest.TestCase):
    def test_reports_missing_tool(self) -> None:
        with mock.patch("quickfm.clipboard.shutil.which", return_value=None):
            self.assertIn("No clipboard tool", copy_to_clipboard("x"))

    def test_pipes_text_to_first_available_tool(self) -> None:
        with mock.patch("quickfm.clipboard.sys.platform", "linux"), mock.patch(
            "quickfm.clipboard.shutil.which",
            side_effect=lambda name: "/usr/bin/xclip" if name == "xclip" else None,
        ), mock.patch("quickfm.clipboard.subprocess.run") as run_mock:
            self.assertIsNone(copy_to_clipboard("/tmp/file.txt"))

        args, kwargs = run_mock.call_args
        self.assertEqual(args[0], ["xclip", "-selection", "clipboard"])
        self.assertEqual(kwargs["input"], b"/tmp/file.txt")

    def test_tool_failure_becomes_message(self) -> None:
        with mock.patch("quickfm.clipboard.shutil.which", return_value="/usr/bin/tool"), mock.patch(
            "quickfm.clipboard.subprocess.run",
            side_effect=subprocess.CalledProcessError(1, "tool"),
        ):
            self.assertIn("failed", copy_to_clipboard("x"))


if __name__ == "__main__":
    unittest.main()
