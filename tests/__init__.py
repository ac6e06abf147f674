# SPDX-License-Identifier: AGPL-3.0-or-later
# pylint: disable=missing-module-docstring

import unittest

from engineprefs.enginelib import EngineDescriptor, EngineCatalog
from engineprefs.registry import EngineRegistry
from engineprefs.store import MemoryStore

DEFAULT_ENGINE_NAME = "Yahoo"
EXPECTED_ENGINE_NAMES = ["Amazon.com", "Bing", "DuckDuckGo", "Google", "Twitter", "Wikipedia", "Yahoo"]

ENGINE_LIST = [
    {"name": name, "search_url": f"https://{name.lower()}.example.org/?q={{searchTerms}}"}
    for name in EXPECTED_ENGINE_NAMES
]


class PrefsTestCase(unittest.TestCase):
    """Base test case of engineprefs, every test starts with a new (empty)
    profile in :py:obj:`PrefsTestCase.store`."""

    region_default: str | None = DEFAULT_ENGINE_NAME

    def setUp(self):
        super().setUp()
        self.store = MemoryStore()
        self.catalog = EngineCatalog(ENGINE_LIST)

    def new_registry(self, engines: list[EngineDescriptor] | None = None) -> EngineRegistry:
        """A registry on the profile of the test (:py:obj:`PrefsTestCase.store`)."""
        if engines is None:
            engines = self.catalog.list_engines()
        return EngineRegistry(engines, self.store, region_default=self.region_default)

    def assertOrder(self, reg: EngineRegistry, names: list[str]):  # pylint: disable=invalid-name
        self.assertEqual([eng.short_name for eng in reg.ordered_engines], names)

    def assertInvariants(self, reg: EngineRegistry):  # pylint: disable=invalid-name
        names = [eng.short_name for eng in reg.ordered_engines]
        self.assertEqual(sorted(names), sorted(self.catalog.keys()))
        self.assertEqual(names[0], reg.default_engine.short_name)
        self.assertTrue(reg.is_engine_enabled(reg.default_engine))
