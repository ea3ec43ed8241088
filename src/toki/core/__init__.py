"""Functional core - pure business logic with no I/O."""

from .agenda import (
    AgendaItem,
    ItemKind,
    OneOffItem,
    Priority,
    RecurringItem,
    TaskItem,
    Weekday,
)
from .ordering import agenda_sort_key, priority_label, priority_rank, sort_agenda, sort_upcoming
from .schedule import (
    WeeklyView,
    build_weekly_view,
    count_items,
    items_for_day,
    next_id,
    upcoming_tasks,
    week_bounds,
)

__all__ = [
    # Model
    "AgendaItem",
    "ItemKind",
    "OneOffItem",
    "Priority",
    "RecurringItem",
    "TaskItem",
    "Weekday",
    # Ordering
    "agenda_sort_key",
    "priority_label",
    "priority_rank",
    "sort_agenda",
    "sort_upcoming",
    # Schedule
    "WeeklyView",
    "build_weekly_view",
    "count_items",
    "items_for_day",
    "next_id",
    "upcoming_tasks",
    "week_bounds",
]
