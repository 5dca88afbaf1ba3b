"""Ordered collections in which a later item replaces one with the same key."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Hashable, Iterator, Optional, TypeVar

__all__ = ["KeyedCollection", "FieldRaw", "fields_collection", "names_collection"]

T = TypeVar("T")


class KeyedCollection(Generic[T]):
    """Keeps first-seen order; re-appending a key replaces the item in place.

    Without a key function, each item is its own key.
    """

    def __init__(self, key: Optional[Callable[[T], Hashable]] = None) -> None:
        self._key = key
        self._items: dict[Hashable, T] = {}

    def append(self, item: T) -> None:
        item_key = item if self._key is None else self._key(item)
        self._items[item_key] = item

    def __iter__(self) -> Iterator[T]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)


@dataclass(frozen=True)
class FieldRaw:
    """A struct field as name, type and tag text."""

    upper_property: str
    property_type: str
    property_tag: str


def fields_collection() -> KeyedCollection[FieldRaw]:
    """Struct fields keyed by property name."""
    return KeyedCollection(key=lambda raw: raw.upper_property)


def names_collection() -> KeyedCollection[str]:
    """Distinct names in first-seen order."""
    return KeyedCollection()