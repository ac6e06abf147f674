# SPDX-License-Identifier: AGPL-3.0-or-later
"""Implementation of the :py:obj:`EngineRegistry`, which manages the search
engines of a profile:

- the display order of the engines (:py:obj:`EngineRegistry.ordered_engines`)
- the default engine (:py:obj:`EngineRegistry.default_engine`), always enabled
  and always first in the order
- the quick search engines (:py:obj:`EngineRegistry.quick_search_engines`),
  engines which are enabled and not the default
- the flags of the search suggestion prompt

The state is read from a :py:obj:`engineprefs.store.PreferenceStore` when the
registry is built and every modification is written back immediately.

.. _old default:

Switching away from the startup default
=======================================

The default engine which was resolved when the registry was built is the
*startup default*.  When the default is switched away from the startup default
for the first time, the name of the startup default is recorded (migration
tombstone at key ``search.migration.oldDefaultName``), the engine stays
enabled as a quick search engine.  If the user restores the startup default,
nothing is disabled.  Switching away from it a second time disables it;
:py:obj:`EngineRegistry.should_disable_old_default` is ``True`` as long as this
state holds.

An engine which was disabled when it became the default is enabled while it is
the default and disabled again when it loses the default status.
"""
from __future__ import annotations

__all__ = ["EngineRegistry", "PREF_KEYS"]

import functools
import threading
import typing

from engineprefs import logger
from engineprefs.exceptions import ConfigurationError, NotFoundError
from engineprefs.enginelib import EngineDescriptor

if typing.TYPE_CHECKING:
    from engineprefs.store import PreferenceStore

log = logger.getChild("registry")

EngineRef = typing.Union[EngineDescriptor, str]


class PREF_KEYS:  # pylint: disable=invalid-name,too-few-public-methods
    """Keys in the preference store."""

    ORDERED_ENGINES = "search.orderedEngineNames"
    DEFAULT_ENGINE = "search.defaultEngineName"
    DISABLED_ENGINES = "search.disabledEngineNames"
    SUGGESTIONS_OPT_IN_SHOWN = "search.suggestions.optInShown"
    SUGGESTIONS_ENABLED = "search.suggestions.enabled"
    MIGRATION_OLD_DEFAULT = "search.migration.oldDefaultName"
    DEFAULT_WAS_DISABLED = "search.defaultEngineWasDisabled"


def sort_key(name: str) -> tuple[str, str]:
    """Case-insensitive alphabetical order, ties are broken by the ordinal
    order of the name."""
    return (name.casefold(), name)


def _locked(func):
    @functools.wraps(func)
    def wrapper(self: "EngineRegistry", *args, **kwargs):
        with self._lock:  # pylint: disable=protected-access
            return func(self, *args, **kwargs)

    return wrapper


class EngineRegistry:  # pylint: disable=too-many-instance-attributes
    """Search engines of a profile.

    :param engines: the catalog, a list of engine descriptors with unique
      short names (see :py:obj:`engineprefs.enginelib.EngineCatalog.list_engines`)
    :param store: the preference store of the profile
    :param region_default: name of the engine which becomes default on the
      first run (``search.default_engine`` in the settings)

    A :py:obj:`ConfigurationError` is raised if the catalog is empty.
    """

    def __init__(
        self,
        engines: typing.Iterable[EngineDescriptor],
        store: "PreferenceStore",
        region_default: str | None = None,
    ):
        self._lock = threading.RLock()
        self.store = store
        self.region_default = region_default

        self._engines: dict[str, EngineDescriptor] = {}
        for eng in engines:
            if eng.short_name in self._engines:
                raise ConfigurationError(f"ambiguous engine name in catalog: {eng.short_name}")
            self._engines[eng.short_name] = eng

        if not self._engines:
            raise ConfigurationError("the catalog is empty, there is no engine to default to")

        self._ordered: list[str] = []
        self._default: str = ""
        self._disabled: set[str] = set()
        self._migration_old_default: str | None = None
        self._default_was_disabled: bool = False
        self._suggestions_opt_in_shown: bool = False
        self._suggestions_enabled: bool = False

        self._load()
        self.startup_default: str = self._default
        """The default engine resolved when the registry was built."""

    # construction & reconciliation ..

    def _catalog_order(self, names: typing.Iterable[str]) -> list[str]:
        return sorted(names, key=sort_key)

    def _load(self):
        store = self.store

        # order of the engines
        persisted = store.get_list(PREF_KEYS.ORDERED_ENGINES)
        if persisted is None:
            ordered = self._catalog_order(self._engines)
            if self.region_default in self._engines:
                ordered.remove(self.region_default)  # type: ignore
                ordered.insert(0, self.region_default)  # type: ignore
            log.debug("first run, engines in default order: %s", ordered)
        else:
            ordered = []
            for name in persisted:
                if name not in self._engines:
                    log.info("engine '%s' is no longer in the catalog, drop it from the order", name)
                    continue
                if name not in ordered:
                    ordered.append(name)
            new_names = self._catalog_order(set(self._engines) - set(ordered))
            if new_names:
                log.info("append new engines to the order: %s", new_names)
            ordered.extend(new_names)
        self._ordered = ordered

        # default engine
        default = store.get_str(PREF_KEYS.DEFAULT_ENGINE)
        default_was_disabled = bool(store.get_bool(PREF_KEYS.DEFAULT_WAS_DISABLED))
        if default not in self._engines:
            if default is not None:
                log.info("default engine '%s' is no longer in the catalog", default)
            default_was_disabled = False
            if self.region_default in self._engines:
                default = self.region_default
            else:
                default = self._ordered[0]
        self._default = default  # type: ignore
        self._default_was_disabled = default_was_disabled

        # disabled engines, on the first run the engines marked as disabled
        # in the catalog
        disabled = store.get_list(PREF_KEYS.DISABLED_ENGINES)
        if disabled is None:
            disabled = [name for name, eng in self._engines.items() if eng.disabled]
        self._disabled = {name for name in disabled if name in self._engines}
        self._disabled.discard(self._default)

        self._normalize()

        tombstone = store.get_str(PREF_KEYS.MIGRATION_OLD_DEFAULT)
        if tombstone is not None and tombstone not in self._engines:
            log.info("old default engine '%s' is no longer in the catalog", tombstone)
            tombstone = None
        self._migration_old_default = tombstone

        self._suggestions_opt_in_shown = bool(store.get_bool(PREF_KEYS.SUGGESTIONS_OPT_IN_SHOWN))
        self._suggestions_enabled = bool(store.get_bool(PREF_KEYS.SUGGESTIONS_ENABLED))

    def _normalize(self):
        """The default engine is always first in the order and is always
        enabled."""
        if self._ordered[0] != self._default:
            self._ordered.remove(self._default)
            self._ordered.insert(0, self._default)
        self._disabled.discard(self._default)

    # helper ..

    def _name(self, engine: EngineRef) -> str:
        name = engine if isinstance(engine, str) else engine.short_name
        if name not in self._engines:
            raise NotFoundError(name)
        return name

    def _engine_list(self, names: typing.Iterable[str]) -> list[EngineDescriptor]:
        return [self._engines[name] for name in names]

    def get_engine(self, name: str) -> EngineDescriptor:
        """Returns the descriptor of engine ``name`` (:py:obj:`NotFoundError` if
        there is no such engine)."""
        return self._engines[self._name(name)]

    # persistence ..

    def _save_order(self):
        self.store.set_list(PREF_KEYS.ORDERED_ENGINES, self._ordered)

    def _save_default(self):
        self.store.set_str(PREF_KEYS.DEFAULT_ENGINE, self._default)

    def _save_disabled(self):
        self.store.set_list(PREF_KEYS.DISABLED_ENGINES, sorted(self._disabled, key=sort_key))

    def _save_transition(self):
        self._save_default()
        self._save_disabled()
        self.store.set_bool(PREF_KEYS.DEFAULT_WAS_DISABLED, self._default_was_disabled)
        if self._migration_old_default is None:
            self.store.remove(PREF_KEYS.MIGRATION_OLD_DEFAULT)
        else:
            self.store.set_str(PREF_KEYS.MIGRATION_OLD_DEFAULT, self._migration_old_default)

    # default-change transition ..

    def _change_default(self, new_default: str) -> bool:
        """Switch the default engine to ``new_default``, returns ``False`` if
        the engine is already the default.  The caller has to normalize and
        persist the state."""

        old_default = self._default
        if new_default == old_default:
            return False

        # a default is always enabled, an engine that was disabled before it
        # became default is disabled again when it loses the default status
        new_was_disabled = new_default in self._disabled
        self._disabled.discard(new_default)
        if self._default_was_disabled:
            self._disabled.add(old_default)
        self._default_was_disabled = new_was_disabled

        tombstone = self._migration_old_default
        if tombstone is None:
            if old_default == self.startup_default:
                # first switch away from the startup default: remember it but
                # leave it enabled
                self._migration_old_default = old_default
        elif tombstone == old_default and new_default != self.startup_default:
            log.info("disable old default engine '%s'", old_default)
            self._disabled.add(old_default)

        self._default = new_default
        log.debug(
            "default engine changed: %s --> %s (old default: %s)",
            old_default,
            new_default,
            self._migration_old_default,
        )
        return True

    # ordering & default ..

    @property
    def ordered_engines(self) -> list[EngineDescriptor]:
        """All engines of the catalog in display order, the default engine is
        first.  Setting the order may change the default engine (see
        :py:obj:`EngineRegistry.set_ordered_engines`)."""
        with self._lock:
            return self._engine_list(self._ordered)

    @ordered_engines.setter
    def ordered_engines(self, engines: typing.Iterable[EngineRef]):
        self.set_ordered_engines(engines)

    @property
    def ordered_names(self) -> list[str]:
        with self._lock:
            return list(self._ordered)

    @_locked
    def set_ordered_engines(self, engines: typing.Iterable[EngineRef]):
        """Set the display order.  Engines from the catalog which are not in
        ``engines`` are appended in alphabetical order.  The first engine
        becomes the default engine."""

        names: list[str] = []
        for eng in engines:
            name = self._name(eng)
            if name in names:
                raise ValueError(f"engine '{name}' is given twice in the order")
            names.append(name)
        names.extend(self._catalog_order(set(self._engines) - set(names)))

        self._ordered = names
        default_changed = self._change_default(names[0])
        self._normalize()

        self._save_order()
        if default_changed:
            self._save_transition()

    @property
    def default_engine(self) -> EngineDescriptor:
        """The engine for unqualified searches."""
        with self._lock:
            return self._engines[self._default]

    @default_engine.setter
    def default_engine(self, engine: EngineRef):
        self.set_default_engine(engine)

    @_locked
    def set_default_engine(self, engine: EngineRef):
        name = self._name(engine)
        if not self._change_default(name):
            return
        self._normalize()

        self._save_order()
        self._save_transition()

    @_locked
    def is_engine_default(self, engine: EngineRef) -> bool:
        name = engine if isinstance(engine, str) else engine.short_name
        return name == self._default

    @property
    def should_disable_old_default(self) -> bool:
        """``True`` while the old default engine has been disabled because the
        default was switched away from it again.  A UI shows the quick search
        entry of the old default as disabled."""
        with self._lock:
            tombstone = self._migration_old_default
            return bool(tombstone is not None and tombstone != self._default and tombstone in self._disabled)

    @property
    def migration_old_default(self) -> str | None:
        """Name of the startup default that has been switched away from."""
        return self._migration_old_default

    # enable / disable ..

    @_locked
    def is_engine_enabled(self, engine: EngineRef) -> bool:
        name = engine if isinstance(engine, str) else engine.short_name
        return name not in self._disabled

    @_locked
    def enable_engine(self, engine: EngineRef):
        name = self._name(engine)
        if name not in self._disabled:
            return
        self._disabled.remove(name)
        self._save_disabled()

    @_locked
    def disable_engine(self, engine: EngineRef):
        """Disable engine as quick search engine.  The default engine can't be
        disabled, the request is ignored."""
        name = self._name(engine)
        if name == self._default:
            log.debug("default engine '%s' can't be disabled", name)
            return
        if name in self._disabled:
            return
        self._disabled.add(name)
        self._save_disabled()

    @property
    def quick_search_engines(self) -> list[EngineDescriptor]:
        """Enabled engines in display order, without the default engine."""
        with self._lock:
            return self._engine_list(n for n in self._ordered if n != self._default and n not in self._disabled)

    @property
    def enabled_engines(self) -> list[EngineDescriptor]:
        """Enabled engines in display order, the default engine is first."""
        with self._lock:
            return self._engine_list(n for n in self._ordered if n not in self._disabled)

    # search suggestions ..

    @property
    def should_show_search_suggestions_opt_in(self) -> bool:
        """``True`` as long as the prompt to opt-in search suggestions has not
        been shown."""
        return not self._suggestions_opt_in_shown

    @should_show_search_suggestions_opt_in.setter
    def should_show_search_suggestions_opt_in(self, value: bool):
        with self._lock:
            self._suggestions_opt_in_shown = not value
            self.store.set_bool(PREF_KEYS.SUGGESTIONS_OPT_IN_SHOWN, self._suggestions_opt_in_shown)

    @property
    def should_show_search_suggestions(self) -> bool:
        """Search suggestions are requested from the default engine (disabled by
        default)."""
        return self._suggestions_enabled

    @should_show_search_suggestions.setter
    def should_show_search_suggestions(self, value: bool):
        with self._lock:
            self._suggestions_enabled = bool(value)
            self.store.set_bool(PREF_KEYS.SUGGESTIONS_ENABLED, self._suggestions_enabled)
