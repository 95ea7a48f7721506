"""Habit repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ...models.habit import Habit, HabitLog


class HabitRepository(Protocol):
    """Repository for managing habits and their daily logs."""

    def get_by_id(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        ...

    def list_all(self) -> list[Habit]:
        """List all habits ordered by name."""
        ...

    def create(self, habit: Habit) -> Habit:
        """Create a new habit."""
        ...

    def update(self, habit: Habit) -> Habit:
        """Update an existing habit."""
        ...

    def delete(self, habit_id: int) -> None:
        """Delete a habit and every log it owns."""
        ...

    # Habit log operations
    def get_log(self, habit_id: int, occurred_on: date) -> Optional[HabitLog]:
        """Get the log for a habit on one calendar day."""
        ...

    def list_logs(self, habit_id: int) -> list[HabitLog]:
        """All logs for a habit, oldest first."""
        ...

    def list_all_logs(self) -> list[HabitLog]:
        """Every log for every habit, oldest first."""
        ...

    def upsert_log(self, log: HabitLog, *, today=None) -> HabitLog:
        """Insert or update the log for (habit, day) and refresh the habit's streak."""
        ...

    def toggle_completion(self, habit_id: int, occurred_on=None, *, today=None) -> HabitLog:
        """Flip completion for a day, creating a completed log if none exists."""
        ...

    def delete_log(self, habit_id: int, occurred_on: date, *, today=None) -> bool:
        """Remove the log for a day and refresh the habit's streak."""
        ...

    def refresh_streak(self, habit_id: int, *, today=None) -> Habit:
        """Recompute the cached streak fields from the full log set."""
        ...
