# SPDX-License-Identifier: AGPL-3.0-or-later
"""Implementation of the :py:obj:`EngineDescriptor` class."""

from __future__ import annotations

__all__ = ["EngineDescriptor"]

from typing import Any

import msgspec


class EngineDescriptor(msgspec.Struct, kw_only=True, frozen=True):
    """Immutable description of a search engine from the catalog.  Except the
    :py:obj:`EngineDescriptor.short_name` the values are not interpreted by
    the :py:obj:`engineprefs.registry.EngineRegistry`."""

    short_name: str
    """Unique name of the engine, also used as display name."""

    search_url: str = ""
    """Query template, the term is inserted at ``{searchTerms}``."""

    suggest_url: str | None = None
    """Query template of the suggestion service (if there is one)."""

    icon: str | None = None
    """Name or URL of the engine's icon."""

    disabled: bool = False
    """Not a quick search engine on the first run."""

    def search_url_for(self, query: str) -> str:
        return self.search_url.replace("{searchTerms}", query)

    @staticmethod
    def from_engine_settings(engine_settings: dict[str, Any]) -> "EngineDescriptor":
        """Factory to build a :py:obj:`EngineDescriptor` from the settings of an
        engine in the ``engines:`` list of the ``settings.yml``.  The ``name``
        field is mapped to :py:obj:`EngineDescriptor.short_name`.

        A :py:obj:`ValueError` is raised if the ``name`` is missing or if the
        settings contain unknown fields.
        """
        engine_settings = dict(engine_settings)
        name = engine_settings.pop("name", None)
        if not name:
            raise ValueError("An engine does not have a \"name\" field")

        unknown = set(engine_settings) - set(EngineDescriptor.__struct_fields__)
        if unknown:
            raise ValueError(f"engine {name}: unknown field(s) {', '.join(sorted(unknown))}")
        try:
            return msgspec.convert({"short_name": name, **engine_settings}, type=EngineDescriptor)
        except msgspec.ValidationError as exc:
            raise ValueError(f"engine {name}: {exc}") from exc
