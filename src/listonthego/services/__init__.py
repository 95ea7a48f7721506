"""Service module exports."""

from . import analytics, dates, habit_calendar, habit_logs, insights, reminders, streaks, templates

__all__ = [
    "analytics",
    "dates",
    "habit_calendar",
    "habit_logs",
    "insights",
    "reminders",
    "streaks",
    "templates",
]
