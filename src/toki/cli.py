"""Toki CLI - Personal Agenda."""

import json
import logging
import sys
from datetime import date, datetime

import click

from .config import load_config
from .controller import AgendaController
from .core.agenda import ItemKind, Weekday
from .core.display import (
    format_day,
    format_details,
    format_task_line,
    format_weekly_view,
    item_to_json,
)
from .ports.item_store import StoreError
from .scheduler import Scheduler, open_scheduler

logger = logging.getLogger(__name__)

DATE = click.DateTime(formats=["%Y-%m-%d"])
TIME = click.DateTime(formats=["%H:%M", "%H:%M:%S"])


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _target(value: datetime | None) -> date:
    return value.date() if value else load_config().today()


def _weekday(ctx, param, value: str | None) -> Weekday | None:
    if value is None:
        return None
    try:
        return Weekday.parse(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from None


@click.group()
@click.version_option(package_name="toki")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Toki - Personal Agenda CLI."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command()
@click.option("--date", "-d", "target_date", type=DATE, default=None,
              help="Any date in the week to show (YYYY-MM-DD), defaults to today")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def week(target_date: datetime | None, as_json: bool):
    """Show the Monday-Sunday schedule."""
    view = open_scheduler(load_config()).weekly_schedule(_target(target_date))

    if as_json:
        click.echo(
            json.dumps(
                {
                    "start": view.start.isoformat(),
                    "end": view.end.isoformat(),
                    "days": {
                        day.name: [item_to_json(i) for i in view.items_for(day)]
                        for day in Weekday
                    },
                },
                indent=2,
            )
        )
        return

    click.echo(f"Week of {view.start.strftime('%b %d')} - {view.end.strftime('%b %d, %Y')}\n")
    click.echo(format_weekly_view(view))


@main.command()
@click.option("--date", "-d", "target_date", type=DATE, default=None,
              help="Date to view (YYYY-MM-DD), defaults to today")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def day(target_date: datetime | None, as_json: bool):
    """Show one day's agenda."""
    target = _target(target_date)
    items = open_scheduler(load_config()).agendas_for_day(target)

    if as_json:
        click.echo(json.dumps([item_to_json(i) for i in items], indent=2))
    else:
        click.echo(format_day(target, items))


@main.command()
@click.option("--date", "-d", "target_date", type=DATE, default=None,
              help="Start date (YYYY-MM-DD), defaults to today")
@click.option("--days", type=click.IntRange(min=0), default=None,
              help="Days to look ahead (default: UPCOMING_DAYS from config)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def upcoming(target_date: datetime | None, days: int | None, as_json: bool):
    """List tasks due soon, soonest and most urgent first."""
    config = load_config()
    target = _target(target_date)
    days = config.upcoming_days if days is None else days
    tasks = open_scheduler(config).upcoming_tasks(target, days)

    if as_json:
        click.echo(json.dumps([item_to_json(t) for t in tasks], indent=2))
        return

    if not tasks:
        click.echo(f"No tasks due in the next {days} days.")
        return

    for task in tasks:
        click.echo(format_task_line(task, target))


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def counts(as_json: bool):
    """Show how many items of each kind are stored."""
    totals = open_scheduler(load_config()).agenda_counts()

    if as_json:
        click.echo(json.dumps(totals, indent=2))
        return

    for label in (ItemKind.TASK.value, ItemKind.SPECIAL.value, ItemKind.REGULAR.value):
        click.echo(f"{label:8} {totals.get(label, 0)}")


@main.command()
@click.argument("item_id", type=int)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def show(item_id: int, as_json: bool):
    """Show the details of one item."""
    item = open_scheduler(load_config()).find(item_id)
    if item is None:
        _fail(f"No agenda with id {item_id}")

    if as_json:
        click.echo(json.dumps(item_to_json(item), indent=2))
    else:
        click.echo(format_details(item))


@main.command()
@click.argument("item_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Don't ask for confirmation")
def delete(item_id: int, yes: bool):
    """Delete an item by id."""
    scheduler = open_scheduler(load_config())
    item = scheduler.find(item_id)
    if item is None:
        _fail(f"No agenda with id {item_id}")

    if not yes and not click.confirm(f"Delete {item.kind.value} '{item.title}'?"):
        return

    try:
        scheduler.delete(item_id, item.kind)
    except StoreError as e:
        _fail(str(e))
    click.echo(f"✓ Deleted '{item.title}'")


# ============== Adding items ==============


def _common_options(f):
    f = click.option("--notes", "-n", default=None, help="Free-text notes")(f)
    f = click.option("--group", "-g", default=None, help="Optional grouping label")(f)
    f = click.option("--category", "-c", default="", help="Classification label")(f)
    f = click.argument("title")(f)
    return f


def _report(result) -> None:
    if not result.success:
        _fail(result.message)
    click.echo(f"✓ {result.message}")


@main.group()
def add():
    """Create a new agenda item."""
    pass


@add.command("task")
@_common_options
@click.option("--due", type=DATE, required=True, help="Due date (YYYY-MM-DD)")
@click.option("--priority", "-p", default=None, help="High, Medium or Low (default Medium)")
def add_task(title, category, group, notes, due: datetime, priority: str | None):
    """Add a task with a due date and priority."""
    controller = AgendaController(open_scheduler(load_config()))
    _report(
        controller.handle_save(
            ItemKind.TASK, title, category=category, group=group, notes=notes,
            due=due.date(), priority=priority,
        )
    )


@add.command("special")
@_common_options
@click.option("--date", "on_date", type=DATE, required=True, help="Date (YYYY-MM-DD)")
@click.option("--time", "at_time", type=TIME, required=True, help="Time (HH:MM)")
def add_special(title, category, group, notes, on_date: datetime, at_time: datetime):
    """Add a one-off agenda on a specific date and time."""
    controller = AgendaController(open_scheduler(load_config()))
    _report(
        controller.handle_save(
            ItemKind.SPECIAL, title, category=category, group=group, notes=notes,
            on_date=on_date.date(), at_time=at_time.time(),
        )
    )


@add.command("regular")
@_common_options
@click.option("--day", "weekday", required=True, callback=_weekday, help="Weekday (e.g. Monday)")
@click.option("--time", "at_time", type=TIME, required=True, help="Time (HH:MM)")
def add_regular(title, category, group, notes, weekday: Weekday, at_time: datetime):
    """Add an agenda that repeats every week."""
    controller = AgendaController(open_scheduler(load_config()))
    _report(
        controller.handle_save(
            ItemKind.REGULAR, title, category=category, group=group, notes=notes,
            weekday=weekday, at_time=at_time.time(),
        )
    )


# ============== Watch ==============


def render_status(scheduler: Scheduler, today: date, days_ahead: int) -> str:
    """Today's agenda, upcoming tasks and totals as one screen of text."""
    tasks = scheduler.upcoming_tasks(today, days_ahead)
    totals = scheduler.agenda_counts()
    upcoming_md = "\n".join(format_task_line(t, today) for t in tasks) or "No upcoming tasks."
    totals_md = ", ".join(f"{label}: {count}" for label, count in totals.items())
    return (
        f"{format_day(today, scheduler.agendas_for_day(today))}\n\n"
        f"### Upcoming ({days_ahead} days)\n{upcoming_md}\n\n"
        f"{totals_md}"
    )


@main.command()
@click.option("--interval", type=click.IntRange(min=1), default=None,
              help="Refresh interval in seconds (default: WATCH_INTERVAL from config)")
def watch(interval: int | None):
    """Keep today's agenda on screen, refreshing periodically."""
    from apscheduler.schedulers.blocking import BlockingScheduler
    from apscheduler.triggers.interval import IntervalTrigger

    config = load_config()
    scheduler = open_scheduler(config)
    interval = interval or config.watch_interval

    def refresh():
        click.clear()
        click.echo(f"{datetime.now().strftime('%H:%M:%S')}  (Ctrl+C to stop)\n")
        click.echo(render_status(scheduler, config.today(), config.upcoming_days))

    job_kwargs = {"timezone": config.timezone} if config.timezone else {}
    job_scheduler = BlockingScheduler(**job_kwargs)
    job_scheduler.add_job(refresh, IntervalTrigger(seconds=interval), id="refresh")
    logger.info(f"Refreshing every {interval}s")

    refresh()
    try:
        job_scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        click.echo("\nStopped.")


if __name__ == "__main__":
    main()
