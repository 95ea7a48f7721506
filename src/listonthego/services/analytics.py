"""Per-habit statistics computed from the raw completion log.

Nothing here is cached: every call recomputes from the snapshot it is handed,
with ``today`` injectable so results are reproducible.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Optional

from ..logging_config import get_logger
from ..models.habit import Habit, HabitFrequency
from .dates import (
    WEEKDAY_NAMES,
    month_bounds,
    shift_months,
    start_of_week,
    sunday_index,
    today_or,
)
from .habit_logs import DayLog, ensure_collection, resolve_logs
from .streaks import current_streak, longest_streak

logger = get_logger(__name__)

DEFAULT_WINDOW_DAYS = 30
WEEKS_TRACKED = 7
MONTHS_TRACKED = 6
MAX_GAP_PENALTY = 50
GAP_PENALTY_PER_DAY = 2

# Expected completions inside a 30-day window per cadence.
EXPECTED_OCCURRENCES = {
    HabitFrequency.DAILY.value: 30,
    HabitFrequency.WEEKLY.value: 4,
    HabitFrequency.MONTHLY.value: 1,
}


@dataclass(slots=True)
class HabitAnalytics:
    """Statistics bundle for one habit at one point in time."""

    total_completions: int
    current_streak: int
    longest_streak: int
    completion_rate: float
    average_mood: Optional[float]
    average_effort: Optional[float]
    weekly_completions: list[int] = field(default_factory=list)
    monthly_completions: list[int] = field(default_factory=list)
    best_day: Optional[str] = None
    missed_days: int = 0
    consistency: int = 0

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class CategoryStats:
    count: int = 0
    completion_rate: float = 0.0


def round_half_up(value: float, places: int = 0) -> float:
    """Round like a calculator does (0.5 goes up), not banker's rounding."""

    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def expected_occurrences(frequency: Any, window_days: int = DEFAULT_WINDOW_DAYS) -> int:
    """Completions a habit of ``frequency`` should have inside the window."""

    key = getattr(frequency, "value", frequency)
    base = EXPECTED_OCCURRENCES.get(key)
    if base is None:
        logger.debug("Unknown frequency treated as daily", extra={"frequency": key})
        base = EXPECTED_OCCURRENCES[HabitFrequency.DAILY.value]
    if window_days == DEFAULT_WINDOW_DAYS:
        return base
    return max(1, int(round_half_up(base * window_days / DEFAULT_WINDOW_DAYS)))


def _average(values: list[int]) -> Optional[float]:
    if not values:
        return None
    return sum(values) / len(values)


def _weekly_completions(days: list[date], today: date) -> list[int]:
    current_week = start_of_week(today)
    counts = []
    for offset in range(WEEKS_TRACKED - 1, -1, -1):
        week_start = current_week - timedelta(weeks=offset)
        week_end = week_start + timedelta(days=6)
        counts.append(sum(1 for day in days if week_start <= day <= week_end))
    return counts


def _monthly_completions(days: list[date], today: date) -> list[int]:
    counts = []
    for offset in range(MONTHS_TRACKED - 1, -1, -1):
        first = shift_months(today, -offset)
        _, last = month_bounds(first.year, first.month - 1)
        counts.append(sum(1 for day in days if first <= day <= last))
    return counts


def _best_day(days: list[date]) -> Optional[str]:
    if not days:
        return None
    counts = [0] * 7
    for day in days:
        counts[sunday_index(day)] += 1
    # index() returns the first maximum, so ties go to the earlier weekday.
    return WEEKDAY_NAMES[counts.index(max(counts))]


def consistency_score(recent: list[DayLog], expected: int) -> int:
    """0-100 score: share of expected completions minus a penalty for gaps."""

    if not recent:
        return 0
    completed = sorted(entry.day for entry in recent if entry.completed)
    base = min(100.0, len(completed) / expected * 100)
    excess_gap_days = 0
    for previous, current in zip(completed, completed[1:]):
        gap = (current - previous).days
        if gap > 1:
            excess_gap_days += gap - 1
    penalty = min(MAX_GAP_PENALTY, excess_gap_days * GAP_PENALTY_PER_DAY)
    return max(0, int(round_half_up(base - penalty)))


def calculate_analytics(
    habit: Habit,
    logs: Iterable,
    *,
    today=None,
    window_days: int = DEFAULT_WINDOW_DAYS,
) -> HabitAnalytics:
    """Aggregate ``habit``'s logs into a :class:`HabitAnalytics` bundle.

    Logs belonging to other habits are ignored; same-day duplicates resolve
    last-write-wins. The completion rate, missed days and consistency all use
    the trailing window ``[today - window_days, today]``.
    """

    today = today_or(today)
    entries = [entry for entry in resolve_logs(logs) if entry.habit_id == habit.id]
    completed = [entry for entry in entries if entry.completed]
    completed_days = sorted(entry.day for entry in completed)

    window_start = today - timedelta(days=window_days)
    recent = [entry for entry in entries if window_start <= entry.day <= today]
    recent_completed = sum(1 for entry in recent if entry.completed)
    completion_rate = (
        round_half_up(recent_completed / len(recent) * 100, 2) if recent else 0.0
    )

    expected = expected_occurrences(habit.frequency, window_days)

    analytics = HabitAnalytics(
        total_completions=len(completed),
        current_streak=current_streak(entries, today=today),
        longest_streak=longest_streak(entries),
        completion_rate=completion_rate,
        average_mood=_average([e.mood for e in completed if e.mood is not None]),
        average_effort=_average([e.effort for e in completed if e.effort is not None]),
        weekly_completions=_weekly_completions(completed_days, today),
        monthly_completions=_monthly_completions(completed_days, today),
        best_day=_best_day(completed_days),
        missed_days=max(0, expected - recent_completed),
        consistency=consistency_score(recent, expected),
    )
    logger.debug(
        "Computed habit analytics",
        extra={"habit_id": habit.id, "logs": len(entries), "as_of": today.isoformat()},
    )
    return analytics


def habit_completion_rate(habit: Habit, logs: Iterable) -> float:
    """All-history completion percentage for one habit (0 when it has no logs)."""

    entries = [entry for entry in resolve_logs(logs) if entry.habit_id == habit.id]
    if not entries:
        return 0.0
    return sum(1 for entry in entries if entry.completed) / len(entries) * 100


def category_stats(habits: Iterable[Habit], logs: Iterable) -> dict[str, CategoryStats]:
    """Per-category running average of each habit's all-history completion rate."""

    habits = ensure_collection(habits, "habits")
    entries = resolve_logs(logs)
    stats: dict[str, CategoryStats] = {}
    for habit in habits:
        rate = habit_completion_rate(habit, entries)
        bucket = stats.setdefault(habit.category, CategoryStats())
        bucket.count += 1
        bucket.completion_rate = (
            bucket.completion_rate * (bucket.count - 1) + rate
        ) / bucket.count
    return stats


def overall_completion_rate(habits: Iterable[Habit], logs: Iterable) -> float:
    """Completed share of every log that belongs to a known habit, as a percentage."""

    habits = ensure_collection(habits, "habits")
    entries = resolve_logs(logs, known_habit_ids={habit.id for habit in habits})
    if not entries:
        return 0.0
    return sum(1 for entry in entries if entry.completed) / len(entries) * 100


__all__ = [
    "CategoryStats",
    "HabitAnalytics",
    "calculate_analytics",
    "category_stats",
    "consistency_score",
    "expected_occurrences",
    "habit_completion_rate",
    "overall_completion_rate",
    "round_half_up",
]
