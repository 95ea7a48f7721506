"""Habit tracking data structures."""

from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum
from typing import ClassVar, Optional

from sqlalchemy import UniqueConstraint
from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel


class HabitFrequency(str, Enum):
    """Expectation cadence used to normalize rate calculations."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class Habit(SQLModel, table=True):
    """A recurring behavior the user tracks.

    ``streak`` and ``last_completed`` are denormalized from the log set and are
    rewritten by the repository every time a log for the habit changes.
    """

    __tablename__: ClassVar[str] = "habit"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=80, index=True)
    description: str = Field(default="", max_length=255)
    frequency: str = Field(default=HabitFrequency.DAILY.value, max_length=16)
    category: str = Field(default="General", max_length=64, index=True)
    goal: Optional[int] = Field(default=None)
    color: Optional[str] = Field(default=None, max_length=7)
    streak: int = Field(default=0, nullable=False)
    last_completed: Optional[date] = Field(default=None)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    logs: list["HabitLog"] = Relationship(
        back_populates="habit",
        sa_relationship=relationship(
            "HabitLog", back_populates="habit", cascade="all, delete-orphan"
        ),
    )


class HabitLog(SQLModel, table=True):
    """One calendar day's completion record for one habit."""

    __tablename__: ClassVar[str] = "habit_log"
    __table_args__ = (UniqueConstraint("habit_id", "occurred_on", name="uq_habit_log_day"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    habit_id: int = Field(foreign_key="habit.id", nullable=False, index=True)
    occurred_on: date = Field(nullable=False, index=True)
    completed: bool = Field(default=True, nullable=False)
    notes: Optional[str] = Field(default=None, max_length=500)
    mood: Optional[int] = Field(default=None, ge=1, le=5)
    effort: Optional[int] = Field(default=None, ge=1, le=5)

    habit: "Habit" = Relationship(
        back_populates="logs",
        sa_relationship=relationship("Habit", back_populates="logs"),
    )
