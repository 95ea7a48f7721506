"""Habit category lookup table."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class HabitCategory(SQLModel, table=True):
    """Grouping metadata; habits reference a category by name."""

    __tablename__: ClassVar[str] = "habit_category"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, unique=True, nullable=False, max_length=64)
    color: str = Field(default="#6B7280", max_length=7)
    icon: Optional[str] = Field(default=None, max_length=32)
    description: str = Field(default="", max_length=255)
