"""Streak calculations over a habit's completion log."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from .dates import today_or
from .habit_logs import completed_days, ensure_collection


@dataclass(slots=True)
class StreakSnapshot:
    """Values the write path copies onto ``Habit.streak``/``Habit.last_completed``."""

    current: int
    longest: int
    last_completed: Optional[date]


def _run_ending_at(days: list[date]) -> int:
    """Length of the consecutive-day run ending at the last element of sorted ``days``."""

    if not days:
        return 0
    run = 1
    expected = days[-1] - timedelta(days=1)
    for day in reversed(days[:-1]):
        if day != expected:
            break
        run += 1
        expected -= timedelta(days=1)
    return run


def current_streak(logs: Iterable, *, today=None) -> int:
    """Return the unbroken daily run ending at the latest completed day.

    Completed days after ``today`` are ignored. An unfinished today does not
    reset a run that ended on an earlier day.
    """

    cutoff = today_or(today)
    days = [day for day in completed_days(logs) if day <= cutoff]
    return _run_ending_at(days)


def longest_streak(logs: Iterable) -> int:
    """Return the longest consecutive-day run anywhere in the history."""

    longest = 0
    run = 0
    last_day: date | None = None
    for day in completed_days(logs):
        if last_day is not None and day == last_day + timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        last_day = day
    return longest


def compute_streaks(logs: Iterable, *, today=None) -> tuple[int, int]:
    """Return (current_streak, longest_streak) from a collection of logs."""

    logs = ensure_collection(logs, "logs")
    return current_streak(logs, today=today), longest_streak(logs)


def streak_snapshot(logs: Iterable, *, today=None) -> StreakSnapshot:
    cutoff = today_or(today)
    logs = ensure_collection(logs, "logs")
    days = [day for day in completed_days(logs) if day <= cutoff]
    return StreakSnapshot(
        current=_run_ending_at(days),
        longest=longest_streak(logs),
        last_completed=days[-1] if days else None,
    )


__all__ = [
    "StreakSnapshot",
    "compute_streaks",
    "current_streak",
    "longest_streak",
    "streak_snapshot",
]
