from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from quickfm import config


class ConfigBehaviorTests(unittest.TestCase):
    def _load_with(self, raw: str | None):
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            if raw is not None:
                config_path.write_text(raw, encoding="utf-8")
            with mock.patch("quickfm.config.CONFIG_PATH", config_path):
                return config.load_config(), config.load_app_config()

    def test_missing_or_malformed_config_gives_defaults(self) -> None:
        for raw in (None, "{not json", "[1, 2]"):
            with self.subTest(raw=raw):
                data, app_config = self._load_with(raw)
                self.assertEqual(data, {})
                self.assertEqual(app_config, config.AppConfig())

    def test_top_level_keys_are_case_insensitive(self) -> None:
        raw = json.dumps(
            {
                "Hotkeys": {"Exit": "Ctrl+E", "CreateFile": "Ctrl+N"},
                "DEFAULTDIRECTORY": "~/work",
                "editor": "vim -u NONE",
                "Bookmarks": ["/tmp", "/var"],
                "templates": {"readme": "# Title\n"},
                "SNIPPETS": {"todo": "# TODO"},
            }
        )

        _, app_config = self._load_with(raw)

        self.assertEqual(app_config.hotkeys, (("Exit", "Ctrl+E"), ("CreateFile", "Ctrl+N")))
        self.assertEqual(app_config.default_directory, "~/work")
        self.assertEqual(app_config.editor, "vim -u NONE")
        self.assertEqual(app_config.bookmarks, ["/tmp", "/var"])
        self.assertEqual(app_config.templates, {"readme": "# Title\n"})
        self.assertEqual(app_config.snippets, {"todo": "# TODO"})

    def test_wrongly_typed_values_are_dropped_with_warnings(self) -> None:
        raw = json.dumps(
            {
                "hotkeys": {"Exit": "Ctrl+E", "ReadFile": 5},
                "defaultDirectory": 42,
                "bookmarks": "not-a-list",
                "templates": ["x"],
            }
        )

        with self.assertLogs("quickfm.config", level="WARNING"):
            _, app_config = self._load_with(raw)

        self.assertEqual(app_config.hotkeys, (("Exit", "Ctrl+E"),))
        self.assertEqual(app_config.default_directory, ".")
        self.assertEqual(app_config.bookmarks, [])
        self.assertEqual(app_config.templates, {})

    def test_legacy_path_is_used_when_default_is_missing(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            default_path = Path(tmp) / "new" / "config.json"
            legacy_path = Path(tmp) / "legacy" / "config.json"
            legacy_path.parent.mkdir()
            legacy_path.write_text(json.dumps({"editor": "micro"}), encoding="utf-8")
            with mock.patch("quickfm.config.CONFIG_PATH", default_path), mock.patch(
                "quickfm.config.DEFAULT_CONFIG_PATH", default_path
            ), mock.patch("quickfm.config.LEGACY_CONFIG_PATH", legacy_path):
                self.assertEqual(config.load_app_config().editor, "micro")


if __name__ == "__main__":
    unittest.main()
