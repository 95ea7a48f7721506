"""Reminder definitions and schedule arithmetic.

Delivering notifications belongs to the host; this module only builds
reminder records, suggests times per habit category and works out when a
reminder is next due.
"""

from __future__ import annotations

import re
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, time, timedelta
from typing import Any, Iterable, Optional

from ..models.habit import Habit
from .dates import sunday_index

# Sunday-first weekday indexes, matching dates.WEEKDAY_NAMES.
EVERY_DAY = (0, 1, 2, 3, 4, 5, 6)
WEEKDAYS = (1, 2, 3, 4, 5)
WEEKEND = (0, 6)

DEFAULT_MESSAGE = "Time to complete your habit!"

SUGGESTED_TIMES = {
    "fitness": ("07:00", "18:00", "19:00"),
    "mindfulness": ("06:30", "08:00", "21:00"),
    "learning": ("08:30", "13:00", "20:00"),
    "health": ("08:00", "12:00", "18:00"),
    "productivity": ("09:00", "14:00", "16:00"),
}
FALLBACK_TIMES = ("09:00", "15:00", "19:00")

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


@dataclass(slots=True)
class HabitReminder:
    id: str
    habit_id: Any
    time: str
    days: list[int] = field(default_factory=list)
    enabled: bool = True
    message: Optional[str] = None

    @property
    def text(self) -> str:
        return self.message or DEFAULT_MESSAGE

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


def parse_time(value: str) -> time:
    """Parse a 24-hour ``HH:MM`` string."""

    match = _TIME_PATTERN.match(value) if isinstance(value, str) else None
    if match is None:
        raise ValueError(f"reminder time must be HH:MM, got {value!r}")
    return time(int(match.group(1)), int(match.group(2)))


def _normalize_days(days: Iterable[int]) -> list[int]:
    values = list(days)
    if not values or any(
        isinstance(d, bool) or not isinstance(d, int) or not 0 <= d <= 6 for d in values
    ):
        raise ValueError(f"reminder days must be weekday indexes 0-6, got {values!r}")
    return sorted(set(values))


def create_custom_reminder(
    habit_id: Any,
    at: str,
    days: Iterable[int],
    message: Optional[str] = None,
) -> HabitReminder:
    """Reminder at ``at`` (``HH:MM``) on the given Sunday-first weekdays."""

    parse_time(at)
    return HabitReminder(
        id=uuid.uuid4().hex,
        habit_id=habit_id,
        time=at,
        days=_normalize_days(days),
        message=message,
    )


def create_daily_reminder(habit_id: Any, at: str, message: Optional[str] = None) -> HabitReminder:
    return create_custom_reminder(habit_id, at, EVERY_DAY, message)


def create_weekday_reminder(habit_id: Any, at: str, message: Optional[str] = None) -> HabitReminder:
    return create_custom_reminder(habit_id, at, WEEKDAYS, message)


def create_weekend_reminder(habit_id: Any, at: str, message: Optional[str] = None) -> HabitReminder:
    return create_custom_reminder(habit_id, at, WEEKEND, message)


def suggest_reminder_times(habit: Habit) -> list[str]:
    """Three suggested ``HH:MM`` slots based on the habit's category."""

    category = (habit.category or "").lower()
    return list(SUGGESTED_TIMES.get(category, FALLBACK_TIMES))


def next_occurrence(reminder: HabitReminder, now: datetime) -> Optional[datetime]:
    """First moment strictly after ``now`` when ``reminder`` is due.

    Returns ``None`` for disabled reminders. A slot at exactly ``now`` counts
    as already passed and rolls to the next matching weekday.
    """

    if not reminder.enabled or not reminder.days:
        return None
    at = parse_time(reminder.time)
    today_index = sunday_index(now.date())
    candidates = []
    for day in reminder.days:
        ahead = (day - today_index) % 7
        due = datetime.combine(now.date() + timedelta(days=ahead), at, tzinfo=now.tzinfo)
        if due <= now:
            due += timedelta(days=7)
        candidates.append(due)
    return min(candidates)


def reminders_for_habit(reminders: Iterable[HabitReminder], habit_id: Any) -> list[HabitReminder]:
    return [r for r in reminders if r.habit_id == habit_id]


__all__ = [
    "EVERY_DAY",
    "HabitReminder",
    "WEEKDAYS",
    "WEEKEND",
    "create_custom_reminder",
    "create_daily_reminder",
    "create_weekday_reminder",
    "create_weekend_reminder",
    "next_occurrence",
    "parse_time",
    "reminders_for_habit",
    "suggest_reminder_times",
]
