"""Pure text formatting for agenda views - no I/O dependencies."""

from datetime import date

from .agenda import AgendaItem, OneOffItem, RecurringItem, TaskItem, Weekday
from .ordering import priority_label
from .schedule import WeeklyView


def format_when(item: AgendaItem) -> str:
    """Short time column for an item: HH:MM for timed items, priority for tasks."""
    match item:
        case TaskItem():
            label = priority_label(item.priority)
            return "[?]" if label == "N/A" else f"[{label[0]}]"
        case RecurringItem() | OneOffItem():
            return item.time_of_day.strftime("%H:%M")
    raise TypeError(f"Not an agenda item: {item!r}")


def format_item_line(item: AgendaItem) -> str:
    """
    Format a single item for a day listing.

    Pure function - no I/O.
    """
    group = f" ({item.group})" if item.group else ""
    return f"  {format_when(item):6} {item.title}{group}  #{item.id} {item.kind.value}"


def format_task_line(task: TaskItem, as_of: date) -> str:
    """Format a task with its urgency relative to `as_of`."""
    days = task.days_until_due(as_of)
    if days is None:
        urgency = "no due date"
    elif days < 0:
        urgency = f"OVERDUE by {-days}d"
    elif days == 0:
        urgency = "due TODAY"
    else:
        urgency = f"due in {days}d"
    return f"- [{priority_label(task.priority)}] {task.title} ({urgency}, {task.due})  #{task.id}"


def format_day(target_date: date, items: list[AgendaItem]) -> str:
    """Format one day's agenda under a heading."""
    lines = [f"### {target_date.strftime('%A, %B %d')}"]
    lines.extend(format_item_line(i) for i in items)
    if not items:
        lines.append("  No agenda.")
    return "\n".join(lines)


def format_weekly_view(view: WeeklyView) -> str:
    """Format a whole week, Monday through Sunday."""
    return "\n\n".join(format_day(view.date_for(day), list(view.items_for(day))) for day in Weekday)


def format_details(item: AgendaItem) -> str:
    """Multi-line detail listing for one item. Absent fields are omitted."""
    rows = [
        ("ID", str(item.id)),
        ("Kind", item.kind.value),
        ("Title", item.title),
        ("Category", item.category),
        ("Group", item.group),
        ("Notes", item.notes),
    ]
    match item:
        case RecurringItem():
            rows += [("Day", item.weekday.label), ("Time", item.time_of_day.strftime("%H:%M"))]
        case OneOffItem():
            rows += [
                ("Date", item.date.isoformat() if item.date else None),
                ("Time", item.time_of_day.strftime("%H:%M")),
            ]
        case TaskItem():
            rows += [
                ("Due", item.due.isoformat() if item.due else None),
                ("Priority", priority_label(item.priority)),
            ]
    return "\n".join(f"{label + ':':10} {value}" for label, value in rows if value)


def item_to_json(item: AgendaItem) -> dict:
    """JSON-ready representation including the kind label."""
    return {"kind": item.kind.value, **item.to_dict()}
