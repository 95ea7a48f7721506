"""Tests for the calendar month grid and its secondary projections."""

from __future__ import annotations

import json
from datetime import date, datetime, timedelta

import pytest

from factories import make_habit, make_log
from listonthego.services.dates import month_bounds
from listonthego.services.habit_calendar import (
    daily_completion_counts,
    generate_calendar_month,
    generate_heatmap_data,
    get_habits_for_date,
    get_monthly_stats,
    get_weekly_overview,
    heatmap_level,
)


def _all_days(grid):
    return [day for week in grid.weeks for day in week.days]


class TestCalendarMonth:
    def test_leap_february_without_habits(self):
        grid = generate_calendar_month(2024, 1, [], [], today=date(2024, 3, 1))

        in_month = [day for day in _all_days(grid) if day.is_current_month]
        assert grid.month_name == "February"
        assert (grid.year, grid.month) == (2024, 1)
        assert grid.total_days == 29
        assert grid.completed_days == 0
        assert len(in_month) == 29
        assert all(day.completion_rate == 0 for day in _all_days(grid))
        assert all(day.habits == [] for day in _all_days(grid))

    def test_grid_is_sunday_aligned_full_weeks(self):
        grid = generate_calendar_month(2024, 1, [], [])

        days = _all_days(grid)
        # Feb 1 2024 is a Thursday, so the grid opens on Sunday Jan 28
        assert days[0].date == date(2024, 1, 28)
        assert days[-1].date == date(2024, 3, 2)
        assert len(grid.weeks) == 5
        assert [week.week_number for week in grid.weeks] == [1, 2, 3, 4, 5]
        assert all(len(week.days) == 7 for week in grid.weeks)
        assert all(day.date.weekday() == 6 for day in (week.days[0] for week in grid.weeks))

    @pytest.mark.parametrize(("year", "month"), [(2024, 0), (2024, 1), (2023, 1), (2024, 8), (2024, 7), (2026, 9)])
    def test_every_day_of_month_appears_exactly_once(self, year, month):
        grid = generate_calendar_month(year, month, [], [])
        first, last = month_bounds(year, month)

        in_month = [day.date for day in _all_days(grid) if day.is_current_month]
        expected = [first + timedelta(days=i) for i in range((last - first).days + 1)]
        assert in_month == expected

    def test_month_starting_on_sunday_has_no_leading_days(self):
        # September 1 2024 is a Sunday
        grid = generate_calendar_month(2024, 8, [], [])
        assert _all_days(grid)[0].date == date(2024, 9, 1)

    def test_month_ending_on_saturday_emits_no_extra_week(self):
        # August 31 2024 is a Saturday
        grid = generate_calendar_month(2024, 7, [], [])
        assert _all_days(grid)[-1].date == date(2024, 8, 31)

    @pytest.mark.parametrize(
        ("month", "expected"),
        [(12, (2025, 0, "January")), (-1, (2023, 11, "December"))],
    )
    def test_out_of_range_month_is_normalized(self, month, expected):
        grid = generate_calendar_month(2024, month, [], [])
        assert (grid.year, grid.month, grid.month_name) == expected

    def test_per_habit_completion_and_rates(self):
        habits = [make_habit(1, name="Run"), make_habit(2, name="Read")]
        logs = [
            make_log(1, date(2024, 1, 10)),
            make_log(2, date(2024, 1, 10), completed=False),
            make_log(1, datetime(2024, 1, 11, 7, 30)),
            make_log(2, date(2024, 1, 11)),
        ]

        grid = generate_calendar_month(2024, 0, habits, logs, today=date(2024, 1, 11))
        days = {day.date: day for day in _all_days(grid)}

        assert days[date(2024, 1, 10)].completion_rate == 0.5
        assert days[date(2024, 1, 11)].completion_rate == 1.0
        assert days[date(2024, 1, 12)].completion_rate == 0.0
        assert grid.completed_days == 2
        assert grid.total_days == 31

        tenth = days[date(2024, 1, 10)].habits
        assert [(h.habit_id, h.habit_name, h.completed) for h in tenth] == [
            (1, "Run", True),
            (2, "Read", False),
        ]

    def test_is_today_uses_injected_day(self):
        grid = generate_calendar_month(2024, 0, [], [], today=date(2024, 1, 15))
        today_cells = [day for day in _all_days(grid) if day.is_today]
        assert [day.date for day in today_cells] == [date(2024, 1, 15)]

    def test_spillover_days_are_not_counted(self):
        habits = [make_habit(1)]
        # Dec 31 2023 is in the January 2024 grid but not in the month
        logs = [make_log(1, date(2023, 12, 31))]

        grid = generate_calendar_month(2024, 0, habits, logs)

        assert _all_days(grid)[0].completion_rate == 1.0
        assert _all_days(grid)[0].is_current_month is False
        assert grid.completed_days == 0

    def test_logs_for_unknown_habits_are_skipped(self):
        grid = generate_calendar_month(2024, 0, [make_habit(1)], [make_log(7, date(2024, 1, 3))])
        assert grid.completed_days == 0

    def test_as_dict_is_json_ready(self):
        grid = generate_calendar_month(2024, 1, [make_habit(1)], [make_log(1, date(2024, 2, 2))])

        payload = json.loads(json.dumps(grid.as_dict()))

        first_day = payload["weeks"][0]["days"][0]
        assert first_day["date"] == "2024-01-28"
        assert payload["completed_days"] == 1


def test_get_habits_for_date():
    habits = [make_habit(1), make_habit(2)]
    logs = [make_log(2, date(2024, 4, 2), id=11)]

    result = get_habits_for_date(date(2024, 4, 2), habits, logs)

    assert [(item.habit_id, item.completed, item.log_id) for item in result] == [
        (1, False, None),
        (2, True, 11),
    ]


def test_daily_completion_counts_cover_the_month():
    habits = [make_habit(1), make_habit(2)]
    logs = [make_log(1, date(2024, 2, 1)), make_log(2, date(2024, 2, 1)), make_log(1, date(2024, 2, 29))]

    counts = daily_completion_counts(2024, 1, habits, logs)

    assert len(counts) == 29
    assert counts[0] == 2
    assert counts[-1] == 1
    assert sum(counts) == 3


@pytest.mark.parametrize(
    ("completed", "total", "level"),
    [(0, 0, 0), (3, 0, 0), (0, 4, 0), (1, 4, 1), (2, 4, 2), (3, 4, 3), (4, 4, 4), (1, 3, 2)],
)
def test_heatmap_level_buckets(completed, total, level):
    assert heatmap_level(completed, total) == level


def test_heatmap_data_counts_completed_logs_per_day():
    habits = [make_habit(i) for i in range(1, 5)]
    start = date(2024, 5, 1)
    logs = []
    for offset in range(5):
        for habit_id in range(1, offset + 1):
            logs.append(make_log(habit_id, start + timedelta(days=offset)))

    cells = generate_heatmap_data(habits, logs, start, start + timedelta(days=4))

    assert [cell.date for cell in cells] == [
        "2024-05-01",
        "2024-05-02",
        "2024-05-03",
        "2024-05-04",
        "2024-05-05",
    ]
    assert [cell.count for cell in cells] == [0, 1, 2, 3, 4]
    assert [cell.level for cell in cells] == [0, 1, 2, 3, 4]


def test_heatmap_reversed_range_is_empty():
    assert generate_heatmap_data([], [], date(2024, 5, 2), date(2024, 5, 1)) == []


def test_weekly_overview_totals():
    habits = [make_habit(1), make_habit(2)]
    start = date(2024, 5, 5)
    logs = [
        make_log(1, start),
        make_log(2, start),
        make_log(1, start + timedelta(days=3)),
        make_log(1, start + timedelta(days=7)),
    ]

    overview = get_weekly_overview(start, habits, logs)

    assert len(overview.days) == 7
    assert overview.days[0].completed == 2
    assert overview.days[3].completed == 1
    assert overview.total_completed == 3
    assert overview.total_possible == 14


def test_weekly_overview_without_habits():
    overview = get_weekly_overview(date(2024, 5, 5), [], [])
    assert overview.total_possible == 0
    assert overview.total_completed == 0


class TestMonthlyStats:
    def test_rollup(self):
        habits = [make_habit(1), make_habit(2)]
        logs = [
            make_log(1, date(2024, 1, 1)),
            make_log(2, date(2024, 1, 1)),
            make_log(1, date(2024, 1, 30)),
            make_log(2, date(2024, 1, 31)),
        ]

        stats = get_monthly_stats(2024, 0, habits, logs)

        assert stats.total_days == 31
        assert stats.active_days == 3
        assert stats.completion_rate == pytest.approx(4 / 62)
        assert stats.best_day.date == date(2024, 1, 1)
        assert stats.best_day.completed == 2
        assert stats.worst_day.date == date(2024, 1, 2)
        assert stats.streak == 2

    def test_empty_month(self):
        stats = get_monthly_stats(2024, 1, [], [])

        assert stats.total_days == 29
        assert stats.active_days == 0
        assert stats.completion_rate == 0.0
        assert stats.best_day is None
        assert stats.worst_day is None
        assert stats.streak == 0

    def test_streak_stops_at_first_idle_day_from_month_end(self):
        habits = [make_habit(1)]
        logs = [make_log(1, date(2024, 4, day)) for day in (27, 29, 30)]

        stats = get_monthly_stats(2024, 3, habits, logs)

        assert stats.streak == 2
        assert json.loads(json.dumps(stats.as_dict()))["best_day"]["date"] == "2024-04-27"


class TestExtremeYears:
    @pytest.mark.parametrize(
        ("year", "month", "expected"),
        [
            (1, 0, (1, 1)),
            (0, 0, (1, 1)),
            (-5, 3, (1, 1)),
            (9999, 11, (9999, 10)),
            (10000, 0, (9999, 10)),
        ],
    )
    def test_grid_is_clamped_to_renderable_months(self, year, month, expected):
        grid = generate_calendar_month(year, month, [make_habit(1)], [])

        assert (grid.year, grid.month) == expected
        assert all(len(week.days) == 7 for week in grid.weeks)
        assert grid.completed_days == 0

    def test_first_and_last_renderable_grids(self):
        earliest = _all_days(generate_calendar_month(1, 1, [], []))
        latest = _all_days(generate_calendar_month(9999, 10, [], []))

        assert earliest[0].date == date(1, 1, 28)
        assert latest[-1].date == date(9999, 12, 4)

    def test_rollups_at_the_edge_of_the_date_range(self):
        assert len(daily_completion_counts(0, 0, [], [])) == 31
        assert get_monthly_stats(9999, 11, [make_habit(1)], []).total_days == 31
        assert get_monthly_stats(10000, 3, [], []).total_days == 31
