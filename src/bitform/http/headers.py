"""Immutable, case-insensitive HTTP headers.

Accepts raw ASGI byte pairs or plain strings; names are lowercased and
values decoded once, at construction.
"""

from collections.abc import Iterable, Iterator, Mapping

_RawPair = tuple[str | bytes, str | bytes]


def _text(value: str | bytes) -> str:
    return value.decode("latin-1") if isinstance(value, bytes) else value


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive HTTP headers.

    ``__getitem__`` returns the first matching value.
    ``get_list`` returns every value for a name (e.g. repeated ``Accept``).

    Usage::

        headers = Headers([(b"content-type", b"text/html")])
        headers = Headers.of({"Content-Type": "text/html"})
        headers["CONTENT-TYPE"]  # "text/html"
    """

    __slots__ = ("_pairs",)

    def __init__(self, raw: Iterable[_RawPair] = ()) -> None:
        pairs = tuple((_text(name).lower(), _text(value)) for name, value in raw)
        object.__setattr__(self, "_pairs", pairs)

    @classmethod
    def of(cls, mapping: Mapping[str, str]) -> "Headers":
        """Build headers from a plain ``{name: value}`` mapping."""
        return cls(mapping.items())

    def __setattr__(self, name: str, value: object) -> None:
        msg = "Headers are immutable."
        raise AttributeError(msg)

    def __getitem__(self, key: str) -> str:
        key_lower = key.lower()
        for name, value in self._pairs:
            if name == key_lower:
                return value
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        key_lower = key.lower()
        return any(name == key_lower for name, _ in self._pairs)

    def __iter__(self) -> Iterator[str]:
        return iter(dict.fromkeys(name for name, _ in self._pairs))

    def __len__(self) -> int:
        return len(dict.fromkeys(name for name, _ in self._pairs))

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"Headers({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        try:
            return self[key]
        except KeyError:
            return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        key_lower = key.lower()
        return [value for name, value in self._pairs if name == key_lower]

    def joined(self, key: str) -> str | None:
        """All values for *key* joined with ``", "``, or ``None`` if absent.

        Repeated list-valued headers (``Accept``, ``Vary``) mean the same
        as one header with comma-separated values.
        """
        values = self.get_list(key)
        return ", ".join(values) if values else None
