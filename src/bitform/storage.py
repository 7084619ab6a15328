"""Storage — persistence backends and the records they hold.

A ``StorageProvider`` is opaque to the application: it only has to
initialize itself in ``setup()``, which runs once, before any module
loads. ``Data`` is a flat record of storable values that storages and
modules pass around without agreeing on a persistence format.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Protocol, runtime_checkable

from bitform.errors import ConfigurationError

type StorableType = bool | str | int | float | Storable | list[StorableType]


class StorageProvider(ABC):
    """A persistence backend.

    ``setup()`` performs whatever initialization the backend needs
    (connecting, opening files, creating schema). Failures propagate;
    the application does not start with a half-initialized storage.
    """

    @abstractmethod
    def setup(self) -> None:
        """Prepare the backend for use."""


@runtime_checkable
class Storable(Protocol):
    """Something that can copy itself into, and restore itself from, ``Data``."""

    def serialize(self, data: "Data") -> "Data": ...
    def deserialize(self, data: "Data") -> None: ...


class Data:
    """A flat mapping of names to storable values.

    Setting a falsy value removes the key, so absent and empty are the
    same thing::

        data = Data()
        data.set("title", "Hello")
        data.set("title", "")      # removed
        data.get("title")          # None
    """

    __slots__ = ("_values",)

    def __init__(self, values: dict[str, StorableType] | None = None) -> None:
        self._values: dict[str, StorableType] = {}
        for name, value in (values or {}).items():
            self.set(name, value)

    def __repr__(self) -> str:
        return f"Data({self._values!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Data):
            return NotImplemented
        return self._values == other._values

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def keys(self) -> list[str]:
        return list(self._values)

    def get(self, name: str) -> StorableType | None:
        return self._values.get(name)

    def set(self, name: str, value: StorableType | None = None) -> None:
        if not value:
            self._values.pop(name, None)
            return
        self._values[name] = value

    def get_bool(self, name: str) -> bool:
        return bool(self._values.get(name, False))

    def get_string(self, name: str) -> str | None:
        value = self._values.get(name)
        return value if isinstance(value, str) else None

    def get_number(self, name: str) -> int | float | None:
        value = self._values.get(name)
        if isinstance(value, bool):
            return None
        return value if isinstance(value, int | float) else None

    def serialize(self, data: "Data") -> "Data":
        """Copy every value into *data* and return it."""
        for name, value in self._values.items():
            data.set(name, value)
        return data

    def deserialize(self, data: "Data") -> None:
        """Merge every value of *data* into this record."""
        for name in data:
            self.set(name, data.get(name))


class MemoryStorage(StorageProvider):
    """Process-local storage keeping named ``Data`` records in a dict.

    Nothing survives a restart. Useful for tests and for modules that
    only need scratch state::

        storage = MemoryStorage()
        app.use(storage)
        # after setup():
        storage.save("settings", Data({"theme": "dark"}))
    """

    __slots__ = ("_records",)

    def __init__(self) -> None:
        self._records: dict[str, Data] | None = None

    @property
    def ready(self) -> bool:
        return self._records is not None

    def setup(self) -> None:
        if self._records is None:
            self._records = {}

    def _require_ready(self) -> dict[str, Data]:
        if self._records is None:
            msg = "MemoryStorage used before setup() was called."
            raise ConfigurationError(msg)
        return self._records

    def save(self, key: str, record: Storable) -> None:
        """Store a snapshot of *record* under *key*."""
        self._require_ready()[key] = record.serialize(Data())

    def load(self, key: str, into: Storable | None = None) -> Data | None:
        """Return the record stored under *key*, or ``None``.

        When *into* is given, the stored values are also deserialized
        into it.
        """
        stored = self._require_ready().get(key)
        if stored is None:
            return None
        copy = stored.serialize(Data())
        if into is not None:
            into.deserialize(copy)
        return copy

    def delete(self, key: str) -> bool:
        return self._require_ready().pop(key, None) is not None

    def keys(self) -> list[str]:
        return list(self._require_ready())
