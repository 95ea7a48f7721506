"""SQLModel implementation of the habit category repository."""

from __future__ import annotations

from typing import Callable, Optional

from sqlmodel import Session, select

from ...models.category import HabitCategory


class SQLModelCategoryRepository:
    """SQLModel-based category repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get_by_name(self, name: str) -> Optional[HabitCategory]:
        with self.session_factory() as session:
            obj = session.exec(select(HabitCategory).where(HabitCategory.name == name)).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self) -> list[HabitCategory]:
        with self.session_factory() as session:
            rows = list(session.exec(select(HabitCategory).order_by(HabitCategory.name)).all())
            session.expunge_all()
            return rows

    def create(self, category: HabitCategory) -> HabitCategory:
        with self.session_factory() as session:
            session.add(category)
            session.commit()
            session.refresh(category)
            session.expunge(category)
            return category
