"""Tests for core scheduling logic."""

from datetime import date, time, timedelta

import pytest

from toki.core.agenda import OneOffItem, RecurringItem, TaskItem, Weekday
from toki.core.schedule import (
    build_weekly_view,
    count_items,
    items_for_day,
    next_id,
    upcoming_tasks,
    week_bounds,
)


# Fixtures
@pytest.fixture
def today():
    # A Wednesday; its week runs Mon 13th - Sun 19th
    return date(2025, 1, 15)


@pytest.fixture
def monday(today):
    return today - timedelta(days=2)


@pytest.fixture
def sunday(today):
    return today + timedelta(days=4)


def regular(id, weekday=Weekday.MONDAY, hour=8, title="Gym"):
    return RecurringItem(id=id, title=title, weekday=weekday, time_of_day=time(hour, 0))


def special(id, on, hour=19, title="Concert"):
    return OneOffItem(id=id, title=title, date=on, time_of_day=time(hour, 0))


def task(id, due, priority="M", title="Homework"):
    return TaskItem(id=id, title=title, due=due, priority=priority)


class TestWeekBounds:
    def test_midweek(self, today, monday, sunday):
        assert week_bounds(today) == (monday, sunday)

    def test_monday_is_its_own_start(self, monday, sunday):
        assert week_bounds(monday) == (monday, sunday)

    def test_sunday_is_its_own_end(self, monday, sunday):
        assert week_bounds(sunday) == (monday, sunday)

    def test_crosses_year_boundary(self):
        start, end = week_bounds(date(2025, 1, 1))
        assert start == date(2024, 12, 30)
        assert end == date(2025, 1, 5)


class TestBuildWeeklyView:
    def test_empty_stores_give_seven_empty_days(self, today):
        view = build_weekly_view(today, [], [], [])
        assert list(view.days) == list(Weekday)
        assert all(items == () for items in view.days.values())
        assert view.is_empty()

    def test_regular_appears_every_week(self, today):
        gym = regular(1, Weekday.MONDAY)
        for weeks in (-520, -1, 0, 1, 260):
            view = build_weekly_view(today + timedelta(weeks=weeks), [gym], [], [])
            assert view.items_for(Weekday.MONDAY) == (gym,)

    def test_special_on_window_edges_included(self, monday, sunday, today):
        first, last = special(1, monday), special(2, sunday)
        view = build_weekly_view(today, [], [first, last], [])
        assert view.items_for(Weekday.MONDAY) == (first,)
        assert view.items_for(Weekday.SUNDAY) == (last,)

    def test_special_just_outside_window_excluded(self, monday, sunday, today):
        before = special(1, monday - timedelta(days=1))
        after = special(2, sunday + timedelta(days=1))
        view = build_weekly_view(today, [], [before, after], [])
        assert view.is_empty()

    def test_task_placed_on_due_weekday(self, today):
        t = task(1, today)
        view = build_weekly_view(today, [], [], [t])
        assert view.items_for(Weekday.WEDNESDAY) == (t,)

    def test_undated_items_skipped(self, today):
        view = build_weekly_view(
            today, [], [special(1, None)], [task(2, None)]
        )
        assert view.is_empty()

    def test_day_is_ordered(self, today):
        gym = regular(1, Weekday.WEDNESDAY, hour=8)
        concert = special(2, today, hour=19)
        homework = task(3, today, "H")
        view = build_weekly_view(today, [gym], [concert], [homework])
        assert view.items_for(Weekday.WEDNESDAY) == (gym, concert, homework)

    def test_bounds_and_dates(self, today, monday, sunday):
        view = build_weekly_view(today, [], [], [])
        assert view.start == monday
        assert view.end == sunday
        assert view.date_for(Weekday.WEDNESDAY) == today
        assert view.date_for(Weekday.SUNDAY) == sunday

    def test_view_is_read_only(self, today):
        view = build_weekly_view(today, [], [], [])
        with pytest.raises(TypeError):
            view.days[Weekday.MONDAY] = ()


class TestItemsForDay:
    def test_collects_all_kinds(self, today):
        gym = regular(1, Weekday.WEDNESDAY, hour=8)
        concert = special(2, today, hour=19)
        homework = task(3, today, "H")
        items = items_for_day(today, [gym], [concert], [homework])
        assert items == [gym, concert, homework]

    def test_tasks_last_regardless_of_input_order(self, today):
        homework = task(1, today, "H")
        late = special(2, today, hour=23)
        early = regular(3, Weekday.WEDNESDAY, hour=6)
        assert items_for_day(today, [early], [late], [homework]) == [early, late, homework]

    def test_exact_date_match_only(self, today):
        items = items_for_day(
            today,
            [regular(1, Weekday.THURSDAY)],
            [special(2, today + timedelta(days=7))],
            [task(3, today - timedelta(days=1))],
        )
        assert items == []

    def test_regular_matches_weekday_in_any_week(self, today):
        gym = regular(1, Weekday.WEDNESDAY)
        assert items_for_day(today + timedelta(weeks=30), [gym], [], []) == [gym]


class TestUpcomingTasks:
    def test_same_day_high_before_low(self, today):
        low = task(1, today + timedelta(days=1), "L")
        high = task(2, today + timedelta(days=1), "H")
        assert upcoming_tasks([low, high], today, 7) == [high, low]

    def test_due_date_before_priority(self, today):
        later_high = task(1, today + timedelta(days=3), "H")
        sooner_low = task(2, today + timedelta(days=1), "L")
        assert upcoming_tasks([later_high, sooner_low], today, 7) == [sooner_low, later_high]

    def test_window_is_inclusive(self, today):
        on_reference = task(1, today)
        on_deadline = task(2, today + timedelta(days=7))
        result = upcoming_tasks([on_deadline, on_reference], today, 7)
        assert result == [on_reference, on_deadline]

    def test_outside_window_excluded(self, today):
        overdue = task(1, today - timedelta(days=1))
        too_far = task(2, today + timedelta(days=8))
        assert upcoming_tasks([overdue, too_far], today, 7) == []

    def test_undated_excluded(self, today):
        assert upcoming_tasks([task(1, None)], today, 7) == []

    def test_zero_days_is_just_today(self, today):
        due_today = task(1, today)
        assert upcoming_tasks([due_today, task(2, today + timedelta(days=1))], today, 0) == [due_today]

    def test_empty(self, today):
        assert upcoming_tasks([], today, 7) == []


class TestCountItems:
    def test_counts_per_label(self, today):
        counts = count_items([regular(1)], [special(2, today), special(3, None)], [])
        assert counts == {"Task": 0, "Special": 2, "Regular": 1}

    def test_empty(self):
        assert count_items([], [], []) == {"Task": 0, "Special": 0, "Regular": 0}


class TestNextId:
    def test_empty_starts_at_one(self):
        assert next_id([], [], []) == 1

    def test_max_across_all_kinds(self, today):
        assert next_id([regular(3)], [special(12, today)], [task(7, today)]) == 13

    def test_ignores_gaps(self, today):
        assert next_id([regular(1), regular(40)], [], []) == 41
