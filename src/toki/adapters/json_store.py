"""JSON file item store adapter."""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Generic, TypeVar

from toki.core.agenda import ItemKind, OneOffItem, RecurringItem, TaskItem
from toki.ports.item_store import StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T", RecurringItem, OneOffItem, TaskItem)

FILE_NAMES = {
    ItemKind.REGULAR: "regular.json",
    ItemKind.SPECIAL: "special.json",
    ItemKind.TASK: "task.json",
}


class _CorruptFile(Exception):
    pass


class JsonItemStore(Generic[T]):
    """
    File-based item store.

    Implements ItemStore protocol. One JSON file holds a list of records of a
    single item type. Reads tolerate a missing or corrupt file and return
    nothing; writes replace the file atomically.
    """

    def __init__(self, path: Path | str, item_type: type[T]):
        self.path = Path(path).expanduser()
        self.item_type = item_type
        self._lock = threading.RLock()

    def _read(self) -> list[T]:
        """Load every record. Raises _CorruptFile when the file can't be parsed."""
        if not self.path.exists():
            return []
        try:
            text = self.path.read_text()
        except OSError as e:
            raise _CorruptFile(f"cannot read {self.path}: {e}") from e
        if not text.strip():
            return []
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise _CorruptFile(f"invalid JSON in {self.path}: {e}") from e
        if data is None:
            return []
        if not isinstance(data, list):
            raise _CorruptFile(f"expected a list in {self.path}, got {type(data).__name__}")
        try:
            return [self.item_type.from_dict(record) for record in data]
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise _CorruptFile(f"malformed record in {self.path}: {e!r}") from e

    def _write(self, items: list[T]) -> None:
        """Replace the file contents atomically."""
        payload = json.dumps([item.to_dict() for item in items], indent=2)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w") as f:
                    f.write(payload)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StoreError(f"Failed to write {self.path}: {e}") from e
        logger.debug(f"Wrote {len(items)} item(s) to {self.path}")

    def _read_for_update(self) -> list[T]:
        """Current items before a write. A corrupt file is moved aside, not overwritten."""
        try:
            return self._read()
        except _CorruptFile as e:
            try:
                fd, backup = tempfile.mkstemp(dir=self.path.parent, prefix=f"{self.path.name}.", suffix=".corrupt")
                os.close(fd)
                logger.warning(f"{e}; moving it to {backup}")
                os.replace(self.path, backup)
            except OSError as move_error:
                raise StoreError(f"Cannot update corrupt store {self.path}: {move_error}") from move_error
            return []

    def find_all(self) -> list[T]:
        """All stored items. Empty if the file is missing or unreadable."""
        try:
            items = self._read()
        except _CorruptFile as e:
            logger.warning(f"Ignoring unreadable store: {e}")
            return []
        logger.debug(f"Read {len(items)} item(s) from {self.path}")
        return items

    def find_by_id(self, item_id: int) -> T | None:
        return next((item for item in self.find_all() if item.id == item_id), None)

    def save(self, item: T) -> None:
        """Insert or replace by id."""
        with self._lock:
            items = [existing for existing in self._read_for_update() if existing.id != item.id]
            items.append(item)
            self._write(items)

    def delete_by_id(self, item_id: int) -> bool:
        with self._lock:
            items = self._read_for_update()
            remaining = [item for item in items if item.id != item_id]
            if len(remaining) == len(items):
                return False
            self._write(remaining)
            return True


def open_stores(data_dir: Path | str) -> tuple[
    JsonItemStore[RecurringItem], JsonItemStore[OneOffItem], JsonItemStore[TaskItem]
]:
    """The three JSON stores (regular, special, task) under a data directory."""
    data_dir = Path(data_dir).expanduser()
    return (
        JsonItemStore(data_dir / FILE_NAMES[ItemKind.REGULAR], RecurringItem),
        JsonItemStore(data_dir / FILE_NAMES[ItemKind.SPECIAL], OneOffItem),
        JsonItemStore(data_dir / FILE_NAMES[ItemKind.TASK], TaskItem),
    )
