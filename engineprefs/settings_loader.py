# SPDX-License-Identifier: AGPL-3.0-or-later
"""Implementation of the engineprefs settings loader.

The default settings are read from the ``settings.yml`` shipped in this
package.  When the environment variable ``ENGINEPREFS_SETTINGS_PATH`` names a
YAML file, the values from that file are merged (deep) over the defaults::

    $ export ENGINEPREFS_SETTINGS_PATH=~/.config/engineprefs/settings.yml

Lists, e.g. the ``engines:`` catalog, are replaced, not merged.
"""
from __future__ import annotations

__all__ = ["load_settings", "DEFAULT_SETTINGS_FILE"]

import typing

from os import environ
from pathlib import Path

import yaml

from .exceptions import ConfigurationError

DEFAULT_SETTINGS_FILE = Path(__file__).parent / "settings.yml"


def load_yaml(file_name: str | Path) -> dict[str, typing.Any]:
    try:
        with open(file_name, "r", encoding="utf-8") as settings_yaml:
            cfg = yaml.safe_load(settings_yaml) or {}
    except IOError as exc:
        raise ConfigurationError(f"can't read settings file {file_name}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"invalid settings.yml {file_name}: {exc}") from exc

    if not isinstance(cfg, dict):
        raise ConfigurationError(f"invalid settings.yml {file_name}: top level is not a mapping")
    return cfg


def update_dict(default_dict: dict, user_dict: dict) -> dict:
    for k, v in user_dict.items():
        if isinstance(v, dict) and isinstance(default_dict.get(k), dict):
            default_dict[k] = update_dict(default_dict[k], v)
        else:
            default_dict[k] = v
    return default_dict


def get_user_settings_path() -> Path | None:
    """Returns the path of the user's settings file or ``None``."""
    name = environ.get("ENGINEPREFS_SETTINGS_PATH")
    if not name:
        return None
    path = Path(name).expanduser()
    if not path.is_file():
        raise ConfigurationError(f"ENGINEPREFS_SETTINGS_PATH: {path} is not a file")
    return path


def load_settings() -> tuple[dict[str, typing.Any], str]:
    """Function for loading the settings of engineprefs, returns a tuple with the
    settings and a message describing where they came from."""

    settings = load_yaml(DEFAULT_SETTINGS_FILE)
    user_settings_path = get_user_settings_path()
    if user_settings_path is None:
        return settings, f"load the default settings from {DEFAULT_SETTINGS_FILE}"

    update_dict(settings, load_yaml(user_settings_path))
    return settings, f"merge the default settings ({DEFAULT_SETTINGS_FILE}) and the user settings ({user_settings_path})"
