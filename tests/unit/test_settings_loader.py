# SPDX-License-Identifier: AGPL-3.0-or-later
# pylint: disable=missing-module-docstring,missing-class-docstring

import tempfile

from pathlib import Path
from unittest.mock import patch

import engineprefs
from engineprefs import settings_loader
from engineprefs.exceptions import ConfigurationError

from tests import PrefsTestCase


class TestSettingsLoader(PrefsTestCase):

    def setUp(self):
        super().setUp()
        self._tmp = tempfile.TemporaryDirectory()  # pylint: disable=consider-using-with
        self.addCleanup(self._tmp.cleanup)
        self.user_settings = Path(self._tmp.name) / "settings.yml"

    def test_default_settings(self):
        with patch.dict(settings_loader.environ, clear=True):
            settings, msg = settings_loader.load_settings()
        self.assertEqual(settings["search"]["default_engine"], "Yahoo")
        self.assertEqual(len(settings["engines"]), 7)
        self.assertIn("default settings", msg)

    def test_user_settings(self):
        self.user_settings.write_text(
            "search:\n  default_engine: Bing\nengines:\n  - name: Bing\n",
            encoding="utf-8",
        )
        with patch.dict(settings_loader.environ, {"ENGINEPREFS_SETTINGS_PATH": str(self.user_settings)}):
            settings, _ = settings_loader.load_settings()
        self.assertEqual(settings["search"]["default_engine"], "Bing")
        # lists are replaced, dicts are merged
        self.assertEqual(settings["engines"], [{"name": "Bing"}])
        self.assertIn("store_path", settings["preferences"])

    def test_invalid_user_settings(self):
        self.user_settings.write_text("- a list\n", encoding="utf-8")
        with patch.dict(settings_loader.environ, {"ENGINEPREFS_SETTINGS_PATH": str(self.user_settings)}):
            with self.assertRaises(ConfigurationError):
                settings_loader.load_settings()

    def test_missing_user_settings(self):
        missing = str(self.user_settings.parent / "missing.yml")
        with patch.dict(settings_loader.environ, {"ENGINEPREFS_SETTINGS_PATH": missing}):
            with self.assertRaises(ConfigurationError):
                settings_loader.load_settings()

    def test_get_setting(self):
        self.assertEqual(engineprefs.get_setting("search.default_engine"), "Yahoo")
        self.assertEqual(engineprefs.get_setting("search.missing", "foo"), "foo")
        self.assertEqual(engineprefs.get_setting("search.default_engine.x", None), None)
        with self.assertRaises(KeyError):
            engineprefs.get_setting("search.missing")
