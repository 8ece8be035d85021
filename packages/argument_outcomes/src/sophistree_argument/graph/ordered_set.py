"""Insertion-ordered, deduplicating set."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, MutableSet
from typing import Generic, Hashable, TypeVar

T = TypeVar("T", bound=Hashable)


class OrderedSet(MutableSet, Generic[T]):
    """A set that iterates in first-insertion order."""

    def __init__(self, items: Iterable[T] = ()):
        self._items: dict[T, None] = dict.fromkeys(items)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def add(self, item: T) -> None:
        self._items[item] = None

    def discard(self, item: T) -> None:
        self._items.pop(item, None)

    def update(self, items: Iterable[T]) -> None:
        for item in items:
            self.add(item)

    def sorted(self) -> list[T]:
        return sorted(self._items)

    def __repr__(self) -> str:
        return f"OrderedSet({list(self._items)!r})"
