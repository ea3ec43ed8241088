"""Ports - interfaces/protocols for external dependencies."""

from .item_store import ItemStore, StoreError

__all__ = [
    "ItemStore",
    "StoreError",
]
