"""Habit category repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.category import HabitCategory


class CategoryRepository(Protocol):
    """Repository for habit category lookups."""

    def get_by_name(self, name: str) -> Optional[HabitCategory]:
        """Retrieve a category by name."""
        ...

    def list_all(self) -> list[HabitCategory]:
        """List all categories ordered by name."""
        ...

    def create(self, category: HabitCategory) -> HabitCategory:
        """Create a new category."""
        ...
