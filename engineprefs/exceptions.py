# SPDX-License-Identifier: AGPL-3.0-or-later
"""Exception types raised by engineprefs."""

from __future__ import annotations


class EnginePrefsException(Exception):
    """Base engineprefs exception."""


class ConfigurationError(EnginePrefsException):
    """The configuration does not allow to build a registry, e.g. the catalog
    is empty and there is no engine that could become the default."""


class NotFoundError(EnginePrefsException, KeyError):
    """An operation references an engine name that is not in the catalog."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown search engine: {name!r}")

    def __str__(self):
        return self.args[0]


class StoreError(EnginePrefsException):
    """Reading from or writing to the preference store failed."""

    def __init__(self, message: str, key: str | None = None):
        self.key = key
        if key is not None:
            message = f"{key}: {message}"
        super().__init__(message)
