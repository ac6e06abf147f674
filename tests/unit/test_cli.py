# SPDX-License-Identifier: AGPL-3.0-or-later
# pylint: disable=missing-module-docstring,missing-class-docstring

import tempfile

from pathlib import Path

from typer.testing import CliRunner

from engineprefs.cli import CLI
from engineprefs.registry import PREF_KEYS
from engineprefs.store import JSONFileStore

from tests import PrefsTestCase


class TestCLI(PrefsTestCase):

    def setUp(self):
        super().setUp()
        self._tmp = tempfile.TemporaryDirectory()  # pylint: disable=consider-using-with
        self.addCleanup(self._tmp.cleanup)
        self.file_name = str(Path(self._tmp.name) / "prefs.json")
        self.runner = CliRunner()

    def invoke(self, *args: str):
        return self.runner.invoke(CLI, ["--store", self.file_name, *args])

    def test_list(self):
        result = self.invoke("list")
        self.assertEqual(result.exit_code, 0, result.output)
        lines = result.output.splitlines()
        self.assertTrue(lines[0].startswith("Yahoo"))
        self.assertIn("[default]", lines[0])
        self.assertEqual(len(lines), 7)

    def test_default(self):
        result = self.invoke("default", "Bing")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(), "Bing")
        self.assertEqual(JSONFileStore(self.file_name).get_str(PREF_KEYS.DEFAULT_ENGINE), "Bing")

        result = self.invoke("default")
        self.assertEqual(result.output.strip(), "Bing")

    def test_unknown_engine(self):
        result = self.invoke("default", "AltaVista")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("unknown search engine: 'AltaVista'", result.output)

    def test_order(self):
        result = self.invoke("order", "Twitter", "DuckDuckGo")
        self.assertEqual(result.exit_code, 0, result.output)
        names = [line.split()[0] for line in result.output.splitlines()[:3]]
        self.assertEqual(names, ["Twitter", "DuckDuckGo", "Amazon.com"])

    def test_enable_disable(self):
        self.assertEqual(self.invoke("disable", "Bing").exit_code, 0)
        self.assertEqual(JSONFileStore(self.file_name).get_list(PREF_KEYS.DISABLED_ENGINES), ["Bing"])
        self.assertIn("[disabled]", [l for l in self.invoke("list").output.splitlines() if l.startswith("Bing")][0])

        self.assertEqual(self.invoke("enable", "Bing").exit_code, 0)
        self.assertEqual(JSONFileStore(self.file_name).get_list(PREF_KEYS.DISABLED_ENGINES), [])

    def test_disable_default(self):
        result = self.invoke("disable", "Yahoo")
        self.assertEqual(result.exit_code, 0)
        self.assertIn("can't be disabled", result.output)

    def test_suggestions(self):
        result = self.invoke("suggestions")
        self.assertIn("show opt-in: True", result.output)
        self.assertIn("suggestions: False", result.output)

        result = self.invoke("suggestions", "--no-opt-in", "--enable")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("show opt-in: False", result.output)
        self.assertIn("suggestions: True", result.output)
