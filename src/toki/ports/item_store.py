"""Item store interface."""

from typing import Protocol, TypeVar

T = TypeVar("T")


class StoreError(Exception):
    """Raised when a store cannot persist a change."""

    pass


class ItemStore(Protocol[T]):
    """Interface for storing one kind of agenda item, keyed by id."""

    def find_all(self) -> list[T]:
        """All stored items. Empty (never an error) if storage is missing or unreadable."""
        ...

    def find_by_id(self, item_id: int) -> T | None:
        """The item with this id, or None."""
        ...

    def save(self, item: T) -> None:
        """Insert, or replace the item with the same id. Raises StoreError on write failure."""
        ...

    def delete_by_id(self, item_id: int) -> bool:
        """Remove the item with this id. Returns False (not an error) if absent."""
        ...
