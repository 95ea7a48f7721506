"""Repository protocols."""

from .category import CategoryRepository
from .habit import HabitRepository

__all__ = ["CategoryRepository", "HabitRepository"]
