"""In-memory item store adapter."""

import copy
import threading
from typing import Generic, Iterable, TypeVar

T = TypeVar("T")


class InMemoryItemStore(Generic[T]):
    """
    In-memory item store.

    Implements ItemStore protocol. Items are copied on the way in and out so
    callers never share state with the store.
    """

    def __init__(self, items: Iterable[T] = ()):
        self._items: dict[int, T] = {}
        self._lock = threading.Lock()
        for item in items:
            self.save(item)

    def find_all(self) -> list[T]:
        with self._lock:
            return [copy.copy(item) for item in self._items.values()]

    def find_by_id(self, item_id: int) -> T | None:
        with self._lock:
            item = self._items.get(item_id)
            return copy.copy(item) if item is not None else None

    def save(self, item: T) -> None:
        with self._lock:
            self._items[item.id] = copy.copy(item)

    def delete_by_id(self, item_id: int) -> bool:
        with self._lock:
            return self._items.pop(item_id, None) is not None
