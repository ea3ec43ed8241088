"""Priority ranking and display ordering rules - no I/O dependencies."""

from datetime import time
from typing import Iterable

from .agenda import AgendaItem, OneOffItem, Priority, RecurringItem, TaskItem

UNKNOWN_PRIORITY_RANK = 99

PRIORITY_RANKS = {
    Priority.HIGH.value: 1,
    Priority.MEDIUM.value: 2,
    Priority.LOW.value: 3,
}

PRIORITY_LABELS = {
    Priority.HIGH.value: "HIGH",
    Priority.MEDIUM.value: "MEDIUM",
    Priority.LOW.value: "LOW",
}


def priority_rank(priority: str | None) -> int:
    """Rank a priority code: H=1, M=2, L=3, anything else 99 (lower is more urgent)."""
    if not priority:
        return UNKNOWN_PRIORITY_RANK
    return PRIORITY_RANKS.get(priority.strip().upper(), UNKNOWN_PRIORITY_RANK)


def priority_label(priority: str | None) -> str:
    """Human-readable priority label."""
    if not priority:
        return "N/A"
    return PRIORITY_LABELS.get(priority.strip().upper(), "N/A")


def agenda_sort_key(item: AgendaItem) -> tuple:
    """
    Display ordering for a mixed list of agenda items.

    Timed items (regular and special) come first, by time of day. Tasks are
    day-granular and go after every timed item, most urgent first. Ties keep
    input order (callers rely on sorted() being stable).
    """
    match item:
        case TaskItem():
            return (1, priority_rank(item.priority))
        case RecurringItem() | OneOffItem():
            return (0, item.time_of_day if item.time_of_day is not None else time.max)
    raise TypeError(f"Not an agenda item: {item!r}")


def sort_agenda(items: Iterable[AgendaItem]) -> list[AgendaItem]:
    """Sort agenda items for display. Stable."""
    return sorted(items, key=agenda_sort_key)


def sort_upcoming(tasks: Iterable[TaskItem]) -> list[TaskItem]:
    """Sort tasks by due date, then priority rank. Stable."""
    return sorted(tasks, key=lambda t: (t.due, priority_rank(t.priority)))
