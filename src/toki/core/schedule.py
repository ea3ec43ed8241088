"""Pure scheduling logic - aggregates agenda items into views. No I/O."""

from dataclasses import dataclass
from datetime import date, timedelta
from types import MappingProxyType
from typing import Iterable, Mapping

from .agenda import AgendaItem, ItemKind, OneOffItem, RecurringItem, TaskItem, Weekday
from .ordering import sort_agenda, sort_upcoming


@dataclass(frozen=True)
class WeeklyView:
    """One calendar week (Monday-Sunday) of ordered agenda items.

    Every weekday is present in `days`, in Monday-first order, even when empty.
    """

    start: date
    end: date
    days: Mapping[Weekday, tuple[AgendaItem, ...]]

    def items_for(self, weekday: Weekday) -> tuple[AgendaItem, ...]:
        return self.days[weekday]

    def date_for(self, weekday: Weekday) -> date:
        """Calendar date of a weekday within this week."""
        return self.start + timedelta(days=int(weekday))

    def is_empty(self) -> bool:
        return not any(self.days.values())


def week_bounds(reference: date) -> tuple[date, date]:
    """Monday on or before and Sunday on or after the reference date."""
    start = reference - timedelta(days=reference.weekday())
    return start, start + timedelta(days=6)


def build_weekly_view(
    reference: date,
    regulars: Iterable[RecurringItem],
    specials: Iterable[OneOffItem],
    tasks: Iterable[TaskItem],
) -> WeeklyView:
    """
    Place every item relevant to the week containing `reference` on its weekday.

    Regular items appear every week. Special items and tasks appear only when
    their date falls within the week (inclusive); undated ones are skipped.
    Pure function - no I/O.
    """
    start, end = week_bounds(reference)
    buckets: dict[Weekday, list[AgendaItem]] = {day: [] for day in Weekday}

    for regular in regulars:
        if regular.weekday is not None:
            buckets[regular.weekday].append(regular)

    for item in [*specials, *tasks]:
        item_date = item.relevant_date
        if item_date is None or not start <= item_date <= end:
            continue
        buckets[Weekday.of(item_date)].append(item)

    return WeeklyView(
        start=start,
        end=end,
        days=MappingProxyType({day: tuple(sort_agenda(items)) for day, items in buckets.items()}),
    )


def items_for_day(
    target_date: date,
    regulars: Iterable[RecurringItem],
    specials: Iterable[OneOffItem],
    tasks: Iterable[TaskItem],
) -> list[AgendaItem]:
    """
    All agenda items falling on a single date, in display order.

    Pure function - no I/O.
    """
    weekday = Weekday.of(target_date)
    items: list[AgendaItem] = [r for r in regulars if r.weekday == weekday]
    items.extend(s for s in specials if s.date == target_date)
    items.extend(t for t in tasks if t.due == target_date)
    return sort_agenda(items)


def upcoming_tasks(
    tasks: Iterable[TaskItem],
    reference: date,
    days_ahead: int,
) -> list[TaskItem]:
    """
    Tasks due between `reference` and `reference + days_ahead` (both inclusive).

    Sorted by due date, then priority. Undated tasks are skipped.
    Pure function - no I/O.
    """
    deadline = reference + timedelta(days=days_ahead)
    return sort_upcoming(t for t in tasks if t.due is not None and reference <= t.due <= deadline)


def count_items(
    regulars: Iterable[RecurringItem],
    specials: Iterable[OneOffItem],
    tasks: Iterable[TaskItem],
) -> dict[str, int]:
    """Number of items per kind, keyed by kind label."""
    return {
        ItemKind.TASK.value: len(list(tasks)),
        ItemKind.SPECIAL.value: len(list(specials)),
        ItemKind.REGULAR.value: len(list(regulars)),
    }


def next_id(*collections: Iterable[AgendaItem]) -> int:
    """One more than the highest id across all collections (1 when all are empty)."""
    highest = 0
    for items in collections:
        highest = max(highest, max((item.id for item in items), default=0))
    return highest + 1
