"""Adapters - I/O implementations of ports."""

from .json_store import JsonItemStore, open_stores
from .memory_store import InMemoryItemStore

__all__ = [
    "JsonItemStore",
    "InMemoryItemStore",
    "open_stores",
]
