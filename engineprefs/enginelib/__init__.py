# SPDX-License-Identifier: AGPL-3.0-or-later
"""Implementations of the engine catalog: the immutable descriptions of the
search engines available to the user."""
from __future__ import annotations

__all__ = ["EngineDescriptor", "EngineCatalog", "load_catalog"]

from .engine import EngineDescriptor
from .catalog import EngineCatalog, load_catalog
