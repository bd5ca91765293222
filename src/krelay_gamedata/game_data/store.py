"""
Immutable lookup table for one decoded dataset.

`GameDataMap` maps a short identifier (packet byte, object type, server
abbreviation...) to its record. It is built once from a fully decoded
mapping and never mutated, so it can be shared between threads freely.
"""

from types import MappingProxyType
from typing import Callable, Hashable, Iterator, Mapping, TypeVar

from .models import DataStructure

K = TypeVar("K", bound=Hashable)
V = TypeVar("V", bound=DataStructure)


class KeyNotFoundError(KeyError):
    """Raised when no record matches a lookup."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class GameDataMap(Mapping[K, V]):
    """Read-only mapping of short identifier -> data structure.

    Besides the plain mapping protocol it offers the three lookups the rest
    of the application uses:

    - `by_id`: exact key lookup.
    - `by_name`: first record whose `name` matches.
    - `match`: first record accepted by a predicate.

    `by_name` and `match` scan records in decode order, i.e. the order in
    which the loader produced them. When several records share a name (the
    object and item tables do have duplicates) the earliest one wins. This
    is intentional and stable across loads of the same document.

    Examples:
        packets.by_id(255) -> Packet: UNKNOWN (255)
        servers.by_name("USWest") -> Server: USWest/USW
        packets.match(lambda p: p.name.startswith("TRADE"))
    """

    __slots__ = ("_map",)

    def __init__(self, entries: Mapping[K, V]):
        # Copy first so later changes to the caller's dict cannot leak in
        self._map: Mapping[K, V] = MappingProxyType(dict(entries))

    @property
    def map(self) -> Mapping[K, V]:
        """Read-only view of the underlying id -> structure mapping."""
        return self._map

    def __getitem__(self, key: K) -> V:
        return self.by_id(key)

    def __iter__(self) -> Iterator[K]:
        return iter(self._map)

    def __len__(self) -> int:
        return len(self._map)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({len(self._map)} entries)"

    def by_id(self, key: K) -> V:
        """Select a data structure by its short identifier.

        Raises:
            KeyNotFoundError: If no record has this identifier
        """
        try:
            return self._map[key]
        except KeyError:
            raise KeyNotFoundError(f"No entry with id {key!r}") from None

    def by_name(self, name: str) -> V:
        """Select the first data structure whose name equals `name`.

        Raises:
            KeyNotFoundError: If no record has this name
        """
        for value in self._map.values():
            if value.name == name:
                return value
        raise KeyNotFoundError(f"No entry named {name!r}")

    def match(self, predicate: Callable[[V], bool]) -> V:
        """Select the first data structure for which `predicate` is true.

        Raises:
            KeyNotFoundError: If the predicate accepts no record
        """
        for value in self._map.values():
            if predicate(value):
                return value
        raise KeyNotFoundError("No entry matches the given predicate")
