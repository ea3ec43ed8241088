"""Agenda controller - validates user input and creates items."""

import logging
from dataclasses import dataclass
from datetime import date, time

from .core.agenda import AgendaItem, ItemKind, OneOffItem, Priority, RecurringItem, TaskItem, Weekday
from .ports.item_store import StoreError
from .scheduler import Scheduler

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Raised when user input can't form a valid agenda item."""

    pass


@dataclass
class SaveResult:
    """Outcome of a save request, ready to show to the user."""

    success: bool
    message: str
    item: AgendaItem | None = None


class AgendaController:
    """Turns raw form/command input into saved agenda items."""

    def __init__(self, scheduler: Scheduler):
        self.scheduler = scheduler

    def handle_save(
        self,
        kind: ItemKind | str,
        title: str,
        category: str = "",
        group: str | None = None,
        notes: str | None = None,
        due: date | None = None,
        priority: str | None = None,
        on_date: date | None = None,
        at_time: time | None = None,
        weekday: Weekday | None = None,
    ) -> SaveResult:
        """
        Validate input and save a new item of `kind` under a freshly allocated id.

        Only the fields relevant to the kind are used:
        Task takes `due` and `priority`, Special takes `on_date` and `at_time`,
        Regular takes `weekday` and `at_time`.
        """
        try:
            build = self._builder(kind, title, category, group, notes, due, priority, on_date, at_time, weekday)
        except ValidationError as e:
            return SaveResult(False, str(e))

        try:
            item = self.scheduler.add(build)
        except StoreError as e:
            logger.error(f"Failed to save agenda {title!r}: {e}")
            return SaveResult(False, f"Failed to save agenda. Detail: {e}")

        return SaveResult(True, f"Agenda '{item.title}' saved (#{item.id})", item)

    def _builder(self, kind, title, category, group, notes, due, priority, on_date, at_time, weekday):
        """Validate and return a function building the item from its new id."""
        if not title or not title.strip():
            raise ValidationError("Title cannot be empty")
        title = title.strip()
        group = group.strip() if group and group.strip() else None
        category = (category or "").strip()

        try:
            kind = ItemKind(kind) if isinstance(kind, str) else kind
        except ValueError:
            raise ValidationError("Invalid agenda type") from None

        match kind:
            case ItemKind.TASK:
                if due is None:
                    raise ValidationError("Due date is required for Task")
                code = parse_priority(priority)
                return lambda item_id: TaskItem(
                    id=item_id, title=title, category=category, group=group, notes=notes,
                    due=due, priority=code,
                )
            case ItemKind.SPECIAL:
                if on_date is None or at_time is None:
                    raise ValidationError("Date and time are required for Special agenda")
                return lambda item_id: OneOffItem(
                    id=item_id, title=title, category=category, group=group, notes=notes,
                    date=on_date, time_of_day=at_time,
                )
            case ItemKind.REGULAR:
                if weekday is None or at_time is None:
                    raise ValidationError("Day and time are required for Regular agenda")
                return lambda item_id: RecurringItem(
                    id=item_id, title=title, category=category, group=group, notes=notes,
                    weekday=weekday, time_of_day=at_time,
                )
        raise ValidationError("Invalid agenda type")


def parse_priority(value: str | None) -> str:
    """Priority code from user input. Omitted means Medium."""
    if value is None or not value.strip():
        return Priority.MEDIUM.value
    try:
        return Priority.parse(value).value
    except ValueError:
        raise ValidationError(f"Priority must be High, Medium or Low, not {value!r}") from None
