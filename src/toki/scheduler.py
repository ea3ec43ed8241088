"""Scheduler - binds the three item stores to the pure scheduling core."""

import logging
import threading
from datetime import date
from typing import Callable

from .adapters.json_store import open_stores
from .config import Config
from .core.agenda import AgendaItem, ItemKind, OneOffItem, RecurringItem, TaskItem
from .core import schedule
from .core.schedule import WeeklyView
from .ports.item_store import ItemStore

logger = logging.getLogger(__name__)


class Scheduler:
    """
    Scheduling engine context.

    Reads take a fresh snapshot of the stores on every call; nothing is
    cached. Writes are passed through to the store for the item's kind.
    """

    def __init__(
        self,
        regular_store: ItemStore[RecurringItem],
        special_store: ItemStore[OneOffItem],
        task_store: ItemStore[TaskItem],
    ):
        self.regular_store = regular_store
        self.special_store = special_store
        self.task_store = task_store
        self._write_lock = threading.RLock()

    def store_for(self, kind: ItemKind) -> ItemStore:
        match kind:
            case ItemKind.REGULAR:
                return self.regular_store
            case ItemKind.SPECIAL:
                return self.special_store
            case ItemKind.TASK:
                return self.task_store
        raise ValueError(f"Unknown agenda kind: {kind!r}")

    def _stores(self) -> list[ItemStore]:
        return [self.regular_store, self.special_store, self.task_store]

    # ============== Views ==============

    def weekly_schedule(self, reference: date) -> WeeklyView:
        """Monday-Sunday view of the week containing `reference`."""
        return schedule.build_weekly_view(
            reference,
            self.regular_store.find_all(),
            self.special_store.find_all(),
            self.task_store.find_all(),
        )

    def agendas_for_day(self, target_date: date) -> list[AgendaItem]:
        """Everything on one date, timed items first, then tasks."""
        return schedule.items_for_day(
            target_date,
            self.regular_store.find_all(),
            self.special_store.find_all(),
            self.task_store.find_all(),
        )

    def upcoming_tasks(self, reference: date, days_ahead: int) -> list[TaskItem]:
        """Tasks due within `days_ahead` days of `reference`, soonest first."""
        return schedule.upcoming_tasks(self.task_store.find_all(), reference, days_ahead)

    def agenda_counts(self) -> dict[str, int]:
        """Item count per kind label ("Task", "Special", "Regular")."""
        return schedule.count_items(
            self.regular_store.find_all(),
            self.special_store.find_all(),
            self.task_store.find_all(),
        )

    # ============== Identity & writes ==============

    def next_id(self) -> int:
        """Next free id across all three kinds."""
        return schedule.next_id(*(store.find_all() for store in self._stores()))

    def find(self, item_id: int) -> AgendaItem | None:
        """Look an id up in every store."""
        for store in self._stores():
            item = store.find_by_id(item_id)
            if item is not None:
                return item
        return None

    def save(self, item: AgendaItem) -> None:
        """Insert or replace an item in its kind's store. Raises StoreError."""
        with self._write_lock:
            self.store_for(item.kind).save(item)
        logger.debug(f"Saved {item.kind.value} #{item.id}")

    def delete(self, item_id: int, kind: ItemKind | None = None) -> bool:
        """Remove an item by id. Returns False if no store held it. Raises StoreError."""
        stores = [self.store_for(kind)] if kind else self._stores()
        removed = False
        with self._write_lock:
            for store in stores:
                removed = store.delete_by_id(item_id) or removed
        if removed:
            logger.debug(f"Deleted item #{item_id}")
        return removed

    def add(self, build: Callable[[int], AgendaItem]) -> AgendaItem:
        """
        Allocate an id, build the item with it and save it, as one step.

        `build` receives the new id. Serialized so that two callers sharing
        this scheduler never receive the same id.
        """
        with self._write_lock:
            item = build(self.next_id())
            self.save(item)
        return item


def open_scheduler(config: Config) -> Scheduler:
    """Scheduler backed by the JSON stores in the configured data directory."""
    return Scheduler(*open_stores(config.data_path))
