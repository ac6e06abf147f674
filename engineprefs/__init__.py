# SPDX-License-Identifier: AGPL-3.0-or-later
"""Management of the search engines of a client profile: order, default
engine, quick search engines and the search suggestion prompt.
"""
from __future__ import annotations

__all__ = ["logger", "settings", "get_setting"]

import logging
import typing

from . import settings_loader

logger = logging.getLogger("engineprefs")

LOG_FORMAT_DEBUG = "%(levelname)-7s %(name)-30.30s: %(message)s"
LOG_FORMAT_PROD = "%(asctime)-15s %(name)s: %(message)s"
LOG_LEVEL_PROD = logging.WARNING

_unset = object()

settings: dict[str, typing.Any] = {}
settings_load_message: str = ""


def get_setting(name: str, default: typing.Any = _unset) -> typing.Any:
    """Returns the value to which ``name`` point.  If there is no such name in the
    settings and the ``default`` is unset, a :py:obj:`KeyError` is raised.

    .. code:: python

       get_setting("search.default_engine")
       get_setting("preferences.store_path", "prefs.json")

    """
    value: typing.Any = settings
    for a in name.split("."):
        if isinstance(value, dict):
            value = value.get(a, _unset)
        else:
            value = _unset

        if value is _unset:
            if default is _unset:
                raise KeyError(name)
            value = default
            break

    return value


def is_debug() -> bool:
    return bool(get_setting("general.debug", False))


def init_logging():
    if is_debug():
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT_DEBUG)
        logger.debug("debug mode is on")
    else:
        logging.basicConfig(level=LOG_LEVEL_PROD, format=LOG_FORMAT_PROD)


def _init_settings():
    global settings, settings_load_message  # pylint: disable=global-statement
    settings, settings_load_message = settings_loader.load_settings()
    logger.debug(settings_load_message)


_init_settings()
