# SPDX-License-Identifier: AGPL-3.0-or-later
"""Catalog of the search engines, a map from engine's short name to the
:py:obj:`EngineDescriptor`."""

from __future__ import annotations

__all__ = ["EngineCatalog", "load_catalog"]

import collections
import logging
import msgspec

from engineprefs import logger as log, get_setting
from .engine import EngineDescriptor

log: logging.Logger = log.getChild("catalog")


class EngineCatalog(collections.UserDict[str, EngineDescriptor]):
    """A python dictionary to map :class:`EngineDescriptor` by engine's
    ``short_name``.  The order of the engines in the catalog is meaningless."""

    def __init__(self, engine_list: list[dict]):
        """Initilaize by ``engine_list`` a python list of ``engine_settings``
        (a python dict with the settings of the engine)."""

        super().__init__()

        for engine_settings in engine_list:
            try:
                eng = EngineDescriptor.from_engine_settings(engine_settings)
            except ValueError as exc:
                log.error("%s / engine_settings are ignored/skipped ..", exc)
                continue
            self.register_engine(eng)

    def register_engine(self, eng: EngineDescriptor):
        # exists a engine with identical name?
        if self.get(eng.short_name, msgspec.UNSET) != msgspec.UNSET:
            raise ValueError(f"Engine config error: ambiguous name: {eng.short_name}")
        self[eng.short_name] = eng

    def list_engines(self) -> list[EngineDescriptor]:
        """List of the engines in the catalog."""
        return list(self.values())


def load_catalog(engine_list: list[dict] | None = None) -> EngineCatalog:
    """Instantiates the catalog from the given list of engine-setups, by
    default from the ``engines:`` of the settings::

        catalog = load_catalog(settings["engines"])

    """
    if engine_list is None:
        engine_list = get_setting("engines", [])
    catalog = EngineCatalog(engine_list)
    log.debug("catalog loaded: %s engines", len(catalog))
    return catalog
