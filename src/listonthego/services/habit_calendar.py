"""Month grids, heatmaps and weekly/monthly rollups for the habit calendar.

Projections never raise on degenerate data: no habits or no logs yield
zero-filled structures, and out-of-range months are normalized.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field, fields, is_dataclass
from datetime import MAXYEAR, MINYEAR, date, timedelta
from typing import Any, Iterable, Optional

from ..logging_config import get_logger
from ..models.habit import Habit
from .dates import (
    clamp_month,
    iter_days,
    month_bounds,
    start_of_week,
    to_day,
    today_or,
)
from .habit_logs import DayLog, ensure_collection, resolve_logs

logger = get_logger(__name__)

HEATMAP_THRESHOLDS = (0.25, 0.5, 0.75)

# First and last months whose Sunday-to-Saturday grid fits inside date.min..date.max.
GRID_EARLIEST = (MINYEAR, 1)
GRID_LATEST = (MAXYEAR, 10)


def _plain(value: Any) -> Any:
    """Convert nested dataclasses/dates into JSON-ready primitives."""

    if is_dataclass(value):
        return {f.name: _plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, list):
        return [_plain(item) for item in value]
    if isinstance(value, date):
        return value.isoformat()
    return value


@dataclass(slots=True)
class CalendarHabitData:
    habit_id: Any
    habit_name: str
    completed: bool
    log_id: Any = None


@dataclass(slots=True)
class CalendarDay:
    date: date
    is_current_month: bool
    is_today: bool
    habits: list[CalendarHabitData] = field(default_factory=list)
    completion_rate: float = 0.0


@dataclass(slots=True)
class CalendarWeek:
    days: list[CalendarDay]
    week_number: int


@dataclass(slots=True)
class CalendarMonth:
    """Sunday-start week grid for one month; ``month`` is 0-based."""

    year: int
    month: int
    weeks: list[CalendarWeek]
    month_name: str
    total_days: int
    completed_days: int

    def as_dict(self) -> dict[str, Any]:
        return _plain(self)


@dataclass(slots=True)
class HeatmapCell:
    date: str
    count: int
    level: int


@dataclass(slots=True)
class DayTotals:
    date: date
    completed: int
    total: int


@dataclass(slots=True)
class WeeklyOverview:
    days: list[DayTotals]
    total_completed: int
    total_possible: int

    def as_dict(self) -> dict[str, Any]:
        return _plain(self)


@dataclass(slots=True)
class MonthlyStats:
    total_days: int
    active_days: int
    completion_rate: float
    best_day: Optional[DayTotals]
    worst_day: Optional[DayTotals]
    streak: int

    def as_dict(self) -> dict[str, Any]:
        return _plain(self)


class _CompletionIndex:
    """Lookup of resolved logs by (habit id, day) restricted to known habits."""

    def __init__(self, habits, logs) -> None:
        self.habits: list[Habit] = ensure_collection(habits, "habits")
        entries = resolve_logs(logs, known_habit_ids={habit.id for habit in self.habits})
        self._by_key: dict[tuple[Any, date], DayLog] = {
            (entry.habit_id, entry.day): entry for entry in entries
        }

    def log_for(self, habit: Habit, day: date) -> Optional[DayLog]:
        return self._by_key.get((habit.id, day))

    def habits_for(self, day: date) -> list[CalendarHabitData]:
        result = []
        for habit in self.habits:
            entry = self.log_for(habit, day)
            result.append(
                CalendarHabitData(
                    habit_id=habit.id,
                    habit_name=habit.name,
                    completed=bool(entry and entry.completed),
                    log_id=entry.log_id if entry else None,
                )
            )
        return result

    def completed_on(self, day: date) -> int:
        count = 0
        for habit in self.habits:
            entry = self.log_for(habit, day)
            if entry is not None and entry.completed:
                count += 1
        return count


def heatmap_level(completed: int, total: int) -> int:
    """Bucket a day's completion ratio into an intensity level 0-4."""

    if total <= 0:
        return 0
    rate = completed / total
    if rate <= 0:
        return 0
    for level, threshold in enumerate(HEATMAP_THRESHOLDS, start=1):
        if rate <= threshold:
            return level
    return len(HEATMAP_THRESHOLDS) + 1


def _calendar_day(index: _CompletionIndex, day: date, month: int, today: date) -> CalendarDay:
    habits = index.habits_for(day)
    completed = sum(1 for item in habits if item.completed)
    return CalendarDay(
        date=day,
        is_current_month=day.month == month + 1,
        is_today=day == today,
        habits=habits,
        completion_rate=completed / len(habits) if habits else 0.0,
    )


def generate_calendar_month(
    year: int, month: int, habits: Iterable[Habit], logs: Iterable, *, today=None
) -> CalendarMonth:
    """Build the week grid for ``month`` (0 = January) of ``year``.

    The grid starts on the Sunday on or before the 1st and ends with the week
    containing the last day of the month.
    """

    year, month = clamp_month(year, month, earliest=GRID_EARLIEST, latest=GRID_LATEST)
    today = today_or(today)
    index = _CompletionIndex(habits, logs)
    first, last = month_bounds(year, month)

    grid_start = start_of_week(first)
    week_count = (start_of_week(last) - grid_start).days // 7 + 1

    weeks: list[CalendarWeek] = []
    for week_number in range(1, week_count + 1):
        week_start = grid_start + timedelta(weeks=week_number - 1)
        days = [
            _calendar_day(index, week_start + timedelta(days=offset), month, today)
            for offset in range(7)
        ]
        weeks.append(CalendarWeek(days=days, week_number=week_number))

    in_month = [day for week in weeks for day in week.days if day.is_current_month]
    return CalendarMonth(
        year=year,
        month=month,
        weeks=weeks,
        month_name=calendar.month_name[month + 1],
        total_days=len(in_month),
        completed_days=sum(1 for day in in_month if day.completion_rate > 0),
    )


def get_habits_for_date(day, habits: Iterable[Habit], logs: Iterable) -> list[CalendarHabitData]:
    """Per-habit completion state for a single calendar day."""

    resolved = to_day(day)
    if resolved is None:
        raise TypeError(f"expected a date, got {type(day).__name__}")
    return _CompletionIndex(habits, logs).habits_for(resolved)


def daily_completion_counts(
    year: int, month: int, habits: Iterable[Habit], logs: Iterable
) -> list[int]:
    """Completed-habit count for every day of the month, 1st first."""

    index = _CompletionIndex(habits, logs)
    first, last = month_bounds(year, month)
    return [index.completed_on(day) for day in iter_days(first, last)]


def generate_heatmap_data(
    habits: Iterable[Habit], logs: Iterable, start, end
) -> list[HeatmapCell]:
    """One cell per day in ``[start, end]``; empty when the range is reversed."""

    first, last = to_day(start), to_day(end)
    if first is None or last is None:
        raise TypeError("start and end must be dates")
    index = _CompletionIndex(habits, logs)
    total = len(index.habits)
    cells = []
    for day in iter_days(first, last):
        count = index.completed_on(day)
        cells.append(HeatmapCell(date=day.isoformat(), count=count, level=heatmap_level(count, total)))
    return cells


def get_weekly_overview(start, habits: Iterable[Habit], logs: Iterable) -> WeeklyOverview:
    """Completed vs possible habit check-ins for the 7 days from ``start``."""

    first = to_day(start)
    if first is None:
        raise TypeError(f"expected a date, got {type(start).__name__}")
    index = _CompletionIndex(habits, logs)
    total = len(index.habits)
    days = [
        DayTotals(date=day, completed=index.completed_on(day), total=total)
        for day in iter_days(first, first + timedelta(days=6))
    ]
    return WeeklyOverview(
        days=days,
        total_completed=sum(day.completed for day in days),
        total_possible=total * len(days),
    )


def get_monthly_stats(
    year: int, month: int, habits: Iterable[Habit], logs: Iterable
) -> MonthlyStats:
    """Month rollup: active days, overall rate, best/worst day, trailing streak.

    ``streak`` counts active days backwards from the last day of the month and
    stops at the first day with nothing completed.
    """

    index = _CompletionIndex(habits, logs)
    total = len(index.habits)
    first, last = month_bounds(year, month)
    daily = [
        DayTotals(date=day, completed=index.completed_on(day), total=total)
        for day in iter_days(first, last)
    ]

    total_completed = sum(day.completed for day in daily)
    possible = len(daily) * total

    best = max(daily, key=lambda day: day.completed)
    worst = min(daily, key=lambda day: day.completed)

    streak = 0
    for day in reversed(daily):
        if day.completed <= 0:
            break
        streak += 1

    return MonthlyStats(
        total_days=len(daily),
        active_days=sum(1 for day in daily if day.completed > 0),
        completion_rate=total_completed / possible if possible else 0.0,
        best_day=best if best.completed > 0 else None,
        worst_day=worst if worst.completed < total else None,
        streak=streak,
    )


__all__ = [
    "CalendarDay",
    "CalendarHabitData",
    "CalendarMonth",
    "CalendarWeek",
    "DayTotals",
    "HeatmapCell",
    "MonthlyStats",
    "WeeklyOverview",
    "daily_completion_counts",
    "generate_calendar_month",
    "generate_heatmap_data",
    "get_habits_for_date",
    "get_monthly_stats",
    "get_weekly_overview",
    "heatmap_level",
]
