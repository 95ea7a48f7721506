"""Concrete repository implementations using SQLModel."""

from .category import SQLModelCategoryRepository
from .habit import HabitNotFoundError, SQLModelHabitRepository

__all__ = [
    "HabitNotFoundError",
    "SQLModelCategoryRepository",
    "SQLModelHabitRepository",
]
