"""A small insertion-ordered map whose keys only need to support equality."""

from __future__ import annotations

from typing import Callable, Generic, Iterable, Iterator, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class OrderedMap(Generic[K, V]):
    """Insertion-ordered mapping backed by a list of pairs.

    Keys are compared with ``==`` only, so unhashable keys are allowed.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[tuple[K, V]] = ()) -> None:
        self._entries: list[list] = []
        for key, value in entries:
            self.insert(key, value)

    def _find(self, key: K) -> list | None:
        return next((entry for entry in self._entries if entry[0] == key), None)

    def get(self, key: K) -> V | None:
        """Return the value stored under ``key``, or ``None`` if absent."""
        entry = self._find(key)
        return None if entry is None else entry[1]

    def insert(self, key: K, value: V) -> None:
        """Store ``value`` under ``key``, replacing any previous value in place."""
        entry = self._find(key)
        if entry is None:
            self._entries.append([key, value])
        else:
            entry[1] = value

    def get_or_insert_with(self, key: K, factory: Callable[[], V]) -> V:
        """Return the value under ``key``, inserting ``factory()`` first if absent."""
        entry = self._find(key)
        if entry is None:
            entry = [key, factory()]
            self._entries.append(entry)
        return entry[1]

    def __iter__(self) -> Iterator[tuple[K, V]]:
        return ((key, value) for key, value in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderedMap):
            return NotImplemented
        return list(self) == list(other)

    def __repr__(self) -> str:
        return f"OrderedMap({list(self)!r})"