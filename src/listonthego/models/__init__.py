"""SQLModel table exports."""

from .category import HabitCategory
from .habit import Habit, HabitFrequency, HabitLog

__all__ = [
    "Habit",
    "HabitCategory",
    "HabitFrequency",
    "HabitLog",
]
