"""
iostl Collections

Container kinds with no direct stdlib counterpart: Pair and Multimap.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from collections.abc import Iterable, Iterator
from typing import Any, Generic, NamedTuple, TypeVar

# Classes --------------------------------------------------------------------------------------------------------------

K = TypeVar("K")
V = TypeVar("V")


class Pair(NamedTuple):
    """
    Two-field record shown as `(first,second)`.

    Plain 2-tuples stay ordinary tuples; only Pair is formatted as a pair.
    """
    first: Any
    second: Any


class Multimap(Generic[K, V]):
    """
    Key-value store where one key may hold several values.

    - Iteration yields (key, value) pairs: keys in first-insertion order,
      values of a key in insertion order.
    - len() counts pairs, not distinct keys.
    - Membership (x in mm) applies to KEYS.
    - Keys must be hashable; values may be anything.
    """

    def __init__(self, initial: Iterable[tuple[K, V]] | None = None) -> None:
        self._buckets: dict[K, list[V]] = {}
        self._size = 0
        if initial:
            self.update(initial)

    # ----- Collection protocol -----

    def __iter__(self) -> Iterator[tuple[K, V]]:
        return self.items()

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: object) -> bool:
        return key in self._buckets

    # ----- Lookup -----

    def items(self) -> Iterator[tuple[K, V]]:
        for key, values in self._buckets.items():
            for value in values:
                yield key, value

    def keys(self) -> Iterator[K]:
        """Distinct keys, in first-insertion order."""
        return iter(self._buckets)

    def get_all(self, key: K) -> list[V]:
        """All values of key in insertion order; empty list if key is absent."""
        return list(self._buckets.get(key, ()))

    def count(self, key: K) -> int:
        """Number of values stored under key."""
        return len(self._buckets.get(key, ()))

    # ----- Mutations -----

    def add(self, key: K, value: V) -> None:
        """Append value under key; existing values of key are kept."""
        self._buckets.setdefault(key, []).append(value)
        self._size += 1

    def update(self, pairs: Iterable[tuple[K, V]]) -> None:
        for key, value in pairs:
            self.add(key, value)

    def delete(self, key: K) -> None:
        """Remove key with all of its values. Raises KeyError if missing."""
        values = self._buckets.pop(key)
        self._size -= len(values)

    def clear(self) -> None:
        self._buckets.clear()
        self._size = 0

    # ----- Equality and representation -----

    def __repr__(self) -> str:
        return f"Multimap({list(self.items())!r})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Multimap):
            return self._buckets == other._buckets
        return NotImplemented
