# SPDX-License-Identifier: AGPL-3.0-or-later
"""Preference stores: key/value persistence of a profile.

A store maps string keys to values of type ``str``, ``list[str]`` or
``bool``.  The :py:obj:`PreferenceStore` is the interface used by the
:py:obj:`engineprefs.registry.EngineRegistry`, implementations are

- :py:obj:`MemoryStore`: in memory, lost when the process ends (tests)
- :py:obj:`JSONFileStore`: a JSON file per profile

A getter returns ``None`` if the key does not exist.  If the stored value is of
a different type, a :py:obj:`StoreError` is raised.  Writes are synchronous,
when a setter returns, the value is durable.
"""
from __future__ import annotations

__all__ = ["PreferenceStore", "MemoryStore", "JSONFileStore"]

import abc
import os
import tempfile
import typing

from pathlib import Path

import msgspec

from engineprefs import logger
from engineprefs.exceptions import StoreError

log = logger.getChild("store")

ValueType = str | list[str] | bool


class PreferenceStore(abc.ABC):
    """Abstract base class of a key/value store of a profile."""

    @abc.abstractmethod
    def _get(self, key: str) -> typing.Any:
        """Returns the raw value of ``key`` or ``None``."""

    @abc.abstractmethod
    def _set(self, key: str, value: ValueType):
        """Store value of ``key``."""

    @abc.abstractmethod
    def remove(self, key: str):
        """Remove ``key`` from the store, no error if the key does not exist."""

    def _get_typed(self, key: str, _type: type):
        value = self._get(key)
        if value is None:
            return None
        try:
            return msgspec.convert(value, type=_type, strict=True)
        except msgspec.ValidationError as exc:
            raise StoreError(f"unexpected value {value!r}: {exc}", key=key) from exc

    def get_str(self, key: str) -> str | None:
        return self._get_typed(key, str)

    def set_str(self, key: str, value: str):
        self._set(key, value)

    def get_list(self, key: str) -> list[str] | None:
        return self._get_typed(key, list[str])

    def set_list(self, key: str, value: typing.Iterable[str]):
        self._set(key, list(value))

    def get_bool(self, key: str) -> bool | None:
        return self._get_typed(key, bool)

    def set_bool(self, key: str, value: bool):
        self._set(key, bool(value))


class MemoryStore(PreferenceStore):
    """Store in a python dictionary."""

    def __init__(self, data: dict[str, ValueType] | None = None):
        self.data: dict[str, ValueType] = dict(data or {})

    def _get(self, key: str):
        value = self.data.get(key)
        if isinstance(value, list):
            return list(value)
        return value

    def _set(self, key: str, value: ValueType):
        self.data[key] = value

    def remove(self, key: str):
        self.data.pop(key, None)


class JSONFileStore(PreferenceStore):
    """Store in a JSON file.  The whole file is read once (on first access) and
    is rewritten on every modification.  The file is replaced atomically, a
    crash while writing does not leave a truncated file behind."""

    def __init__(self, file_name: str | Path):
        self.file_name = Path(file_name).expanduser()
        self._data: dict[str, ValueType] | None = None

    @property
    def data(self) -> dict[str, ValueType]:
        if self._data is None:
            self._data = self._load()
        return self._data

    def _load(self) -> dict[str, ValueType]:
        try:
            raw = self.file_name.read_bytes()
        except FileNotFoundError:
            log.debug("JSONFileStore: %s does not exist (new profile)", self.file_name)
            return {}
        except OSError as exc:
            raise StoreError(f"can't read {self.file_name}: {exc}") from exc

        try:
            data = msgspec.json.decode(raw, type=dict[str, typing.Any])
        except msgspec.DecodeError as exc:
            raise StoreError(f"can't decode {self.file_name}: {exc}") from exc
        log.debug("JSONFileStore: loaded %s keys from %s", len(data), self.file_name)
        return data

    def _dump(self, data: dict[str, ValueType]):
        json_bytes = msgspec.json.format(msgspec.json.encode(data), indent=2)
        try:
            self.file_name.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".prefs-", dir=self.file_name.parent)
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(json_bytes)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_name, self.file_name)
            except BaseException:
                os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise StoreError(f"can't write {self.file_name}: {exc}") from exc

    def _get(self, key: str):
        return self.data.get(key)

    def _set(self, key: str, value: ValueType):
        data = dict(self.data)
        data[key] = value
        self._dump(data)
        self._data = data

    def remove(self, key: str):
        if key not in self.data:
            return
        data = dict(self.data)
        del data[key]
        self._dump(data)
        self._data = data
