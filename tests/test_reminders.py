"""Tests for reminder construction and schedule arithmetic."""

from __future__ import annotations

from datetime import datetime, time, timezone

import pytest

from factories import make_habit
from listonthego.services.reminders import (
    HabitReminder,
    create_custom_reminder,
    create_daily_reminder,
    create_weekday_reminder,
    create_weekend_reminder,
    next_occurrence,
    parse_time,
    reminders_for_habit,
    suggest_reminder_times,
)

# 2024-05-08 is a Wednesday
WEDNESDAY_NOON = datetime(2024, 5, 8, 12, 0)


def test_preset_day_sets():
    assert create_daily_reminder(1, "07:00").days == [0, 1, 2, 3, 4, 5, 6]
    assert create_weekday_reminder(1, "07:00").days == [1, 2, 3, 4, 5]
    assert create_weekend_reminder(1, "07:00").days == [0, 6]


def test_custom_reminder_defaults_and_dedupes_days():
    reminder = create_custom_reminder(3, "21:15", [5, 1, 5])

    assert reminder.habit_id == 3
    assert reminder.days == [1, 5]
    assert reminder.enabled is True
    assert reminder.message is None
    assert reminder.text == "Time to complete your habit!"


def test_reminder_ids_are_unique():
    assert create_daily_reminder(1, "07:00").id != create_daily_reminder(1, "07:00").id


@pytest.mark.parametrize("value", ["7:00", "24:00", "12:60", "noon", None])
def test_malformed_times_are_rejected(value):
    with pytest.raises(ValueError):
        create_daily_reminder(1, value)


@pytest.mark.parametrize("days", [[], [7], [-1], ["monday"], [True]])
def test_invalid_days_are_rejected(days):
    with pytest.raises(ValueError):
        create_custom_reminder(1, "08:00", days)


def test_parse_time():
    assert parse_time("06:30") == time(6, 30)


@pytest.mark.parametrize(
    ("category", "expected"),
    [
        ("Fitness", ["07:00", "18:00", "19:00"]),
        ("mindfulness", ["06:30", "08:00", "21:00"]),
        ("Learning", ["08:30", "13:00", "20:00"]),
        ("HEALTH", ["08:00", "12:00", "18:00"]),
        ("Productivity", ["09:00", "14:00", "16:00"]),
        ("Finance", ["09:00", "15:00", "19:00"]),
    ],
)
def test_suggested_times_follow_category(category, expected):
    assert suggest_reminder_times(make_habit(1, category=category)) == expected


def test_next_occurrence_later_today():
    reminder = create_daily_reminder(1, "18:00")
    assert next_occurrence(reminder, WEDNESDAY_NOON) == datetime(2024, 5, 8, 18, 0)


def test_next_occurrence_rolls_past_now_to_next_matching_day():
    weekend = create_weekend_reminder(1, "09:00")
    assert next_occurrence(weekend, WEDNESDAY_NOON) == datetime(2024, 5, 11, 9, 0)

    wednesday_only = create_custom_reminder(1, "12:00", [3])
    assert next_occurrence(wednesday_only, WEDNESDAY_NOON) == datetime(2024, 5, 15, 12, 0)


def test_next_occurrence_keeps_timezone():
    now = WEDNESDAY_NOON.replace(tzinfo=timezone.utc)
    due = next_occurrence(create_daily_reminder(1, "13:00"), now)
    assert due == datetime(2024, 5, 8, 13, 0, tzinfo=timezone.utc)


def test_disabled_reminder_is_never_due():
    reminder = create_daily_reminder(1, "18:00")
    reminder.enabled = False
    assert next_occurrence(reminder, WEDNESDAY_NOON) is None


def test_reminders_for_habit_filters_by_habit():
    reminders = [
        HabitReminder(id="a", habit_id=1, time="07:00", days=[1]),
        HabitReminder(id="b", habit_id=2, time="07:00", days=[1]),
        HabitReminder(id="c", habit_id=1, time="20:00", days=[2]),
    ]
    assert [r.id for r in reminders_for_habit(reminders, 1)] == ["a", "c"]


def test_as_dict():
    reminder = create_weekend_reminder(4, "10:00", "Stretch")
    data = reminder.as_dict()
    assert data["days"] == [0, 6]
    assert data["message"] == "Stretch"
