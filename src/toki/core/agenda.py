"""Pure agenda domain model - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, time
from enum import Enum, IntEnum
from typing import ClassVar


class ItemKind(Enum):
    """The three agenda kinds, valued by their display label."""

    REGULAR = "Regular"
    SPECIAL = "Special"
    TASK = "Task"


class Weekday(IntEnum):
    """Day of week. Values match date.weekday() (Monday = 0)."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def of(cls, d: date) -> "Weekday":
        return cls(d.weekday())

    @classmethod
    def parse(cls, value: str) -> "Weekday":
        """Parse a weekday name or unambiguous prefix ("mon", "Tuesday")."""
        key = value.strip().upper()
        if not key:
            raise ValueError("Empty weekday")
        matches = [day for day in cls if day.name.startswith(key)]
        if len(matches) != 1:
            raise ValueError(f"Unknown weekday: {value!r}")
        return matches[0]

    @property
    def label(self) -> str:
        return self.name.capitalize()


class Priority(Enum):
    """Task priority codes as persisted."""

    HIGH = "H"
    MEDIUM = "M"
    LOW = "L"

    @classmethod
    def parse(cls, value: str) -> "Priority":
        """Parse user input: a code (H/M/L) or a full name, any case."""
        key = value.strip().upper()
        for priority in cls:
            if key in (priority.value, priority.name):
                return priority
        raise ValueError(f"Unknown priority: {value!r}")


def _format_time(value: time) -> str:
    # HH:MM:SS, with microseconds only when present
    return value.isoformat()


def _parse_time(value: str) -> time:
    return time.fromisoformat(value)


@dataclass
class RecurringItem:
    """An item that repeats every week on a fixed weekday and time."""

    kind: ClassVar[ItemKind] = ItemKind.REGULAR

    id: int
    title: str
    weekday: Weekday
    time_of_day: time
    category: str = ""
    group: str | None = None
    notes: str | None = None

    @property
    def relevant_date(self) -> date | None:
        # Recurs every week, so there is no single anchor date.
        return None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "group": self.group,
            "notes": self.notes,
            "weekday": self.weekday.name,
            "time": _format_time(self.time_of_day),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RecurringItem":
        return cls(
            id=int(data["id"]),
            title=data["title"],
            category=data.get("category") or "",
            group=data.get("group"),
            notes=data.get("notes"),
            weekday=Weekday[data["weekday"].upper()],
            time_of_day=_parse_time(data["time"]),
        )


@dataclass
class OneOffItem:
    """An item that occurs exactly once, on a given date and time."""

    kind: ClassVar[ItemKind] = ItemKind.SPECIAL

    id: int
    title: str
    date: date | None
    time_of_day: time
    category: str = ""
    group: str | None = None
    notes: str | None = None

    @property
    def relevant_date(self) -> date | None:
        return self.date

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "group": self.group,
            "notes": self.notes,
            "date": self.date.isoformat() if self.date else None,
            "time": _format_time(self.time_of_day),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "OneOffItem":
        return cls(
            id=int(data["id"]),
            title=data["title"],
            category=data.get("category") or "",
            group=data.get("group"),
            notes=data.get("notes"),
            date=date.fromisoformat(data["date"]) if data.get("date") else None,
            time_of_day=_parse_time(data["time"]),
        )


@dataclass
class TaskItem:
    """A day-granular task with a due date and a priority code."""

    kind: ClassVar[ItemKind] = ItemKind.TASK

    id: int
    title: str
    due: date | None
    priority: str = Priority.MEDIUM.value
    category: str = ""
    group: str | None = None
    notes: str | None = None

    @property
    def relevant_date(self) -> date | None:
        return self.due

    def days_until_due(self, as_of: date) -> int | None:
        """Days until due date (negative if overdue)."""
        if not self.due:
            return None
        return (self.due - as_of).days

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "group": self.group,
            "notes": self.notes,
            "due": self.due.isoformat() if self.due else None,
            "priority": self.priority,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TaskItem":
        return cls(
            id=int(data["id"]),
            title=data["title"],
            category=data.get("category") or "",
            group=data.get("group"),
            notes=data.get("notes"),
            due=date.fromisoformat(data["due"]) if data.get("due") else None,
            priority=Priority.MEDIUM.value if data.get("priority") is None else data["priority"],
        )


AgendaItem = RecurringItem | OneOffItem | TaskItem

ITEM_TYPES: dict[ItemKind, type] = {
    ItemKind.REGULAR: RecurringItem,
    ItemKind.SPECIAL: OneOffItem,
    ItemKind.TASK: TaskItem,
}
