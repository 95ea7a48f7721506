"""SQLModel implementation of the habit repository.

Every write that touches a habit's logs commits the log first and then
recomputes ``Habit.streak``/``Habit.last_completed`` from the full log set, so
the cached fields always match what the streak calculator would report.
"""

from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from sqlmodel import Session, select

from ...logging_config import get_logger
from ...models.habit import Habit, HabitLog
from ...services.dates import to_day, today_or
from ...services.streaks import streak_snapshot

logger = get_logger(__name__)


class HabitNotFoundError(LookupError):
    """Raised when a write references a habit id that does not exist."""

    def __init__(self, habit_id) -> None:
        super().__init__(f"Habit {habit_id} does not exist")
        self.habit_id = habit_id


def _require_day(value) -> date:
    day = to_day(value)
    if day is None:
        raise ValueError(f"occurred_on must be a date, got {value!r}")
    return day


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        with self.session_factory() as session:
            obj = session.get(Habit, habit_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self) -> list[Habit]:
        """List all habits ordered by name."""
        with self.session_factory() as session:
            rows = list(session.exec(select(Habit).order_by(Habit.name)).all())
            session.expunge_all()
            return rows

    def create(self, habit: Habit) -> Habit:
        """Create a new habit."""
        with self.session_factory() as session:
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            logger.info("Habit created", extra={"habit_id": habit.id, "habit_name": habit.name})
            return habit

    def update(self, habit: Habit) -> Habit:
        """Update an existing habit."""
        with self.session_factory() as session:
            habit = session.merge(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def delete(self, habit_id: int) -> None:
        """Delete a habit by ID; its logs go with it."""
        with self.session_factory() as session:
            habit = session.get(Habit, habit_id)
            if habit:
                session.delete(habit)
                session.commit()
                logger.info("Habit deleted", extra={"habit_id": habit_id})

    # Habit log operations
    def get_log(self, habit_id: int, occurred_on: date) -> Optional[HabitLog]:
        """Get the log for a habit on one calendar day."""
        day = _require_day(occurred_on)
        with self.session_factory() as session:
            obj = session.exec(
                select(HabitLog)
                .where(HabitLog.habit_id == habit_id)
                .where(HabitLog.occurred_on == day)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_logs(self, habit_id: int) -> list[HabitLog]:
        """All logs for a habit, oldest first."""
        with self.session_factory() as session:
            rows = list(
                session.exec(
                    select(HabitLog)
                    .where(HabitLog.habit_id == habit_id)
                    .order_by(HabitLog.occurred_on)
                ).all()
            )
            session.expunge_all()
            return rows

    def list_all_logs(self) -> list[HabitLog]:
        """Every log for every habit, oldest first."""
        with self.session_factory() as session:
            rows = list(
                session.exec(select(HabitLog).order_by(HabitLog.occurred_on, HabitLog.id)).all()
            )
            session.expunge_all()
            return rows

    def upsert_log(self, log: HabitLog, *, today=None) -> HabitLog:
        """Insert or update the log for (habit, day), then refresh the streak cache."""
        day = _require_day(log.occurred_on)
        with self.session_factory() as session:
            if session.get(Habit, log.habit_id) is None:
                raise HabitNotFoundError(log.habit_id)
            existing = session.exec(
                select(HabitLog)
                .where(HabitLog.habit_id == log.habit_id)
                .where(HabitLog.occurred_on == day)
            ).first()

            if existing:
                existing.completed = log.completed
                existing.notes = log.notes
                existing.mood = log.mood
                existing.effort = log.effort
                saved = existing
            else:
                saved = HabitLog(
                    habit_id=log.habit_id,
                    occurred_on=day,
                    completed=log.completed,
                    notes=log.notes,
                    mood=log.mood,
                    effort=log.effort,
                )
            session.add(saved)
            session.commit()

            self._refresh_in_session(session, log.habit_id, today=today)
            session.commit()
            session.refresh(saved)
            session.expunge(saved)
            return saved

    def toggle_completion(self, habit_id: int, occurred_on=None, *, today=None) -> HabitLog:
        """Flip completion for a day, creating a completed log if none exists."""
        day = _require_day(occurred_on) if occurred_on is not None else today_or(today)
        existing = self.get_log(habit_id, day)
        if existing is None:
            log = HabitLog(habit_id=habit_id, occurred_on=day, completed=True)
        else:
            log = existing
            log.completed = not existing.completed
        saved = self.upsert_log(log, today=today)
        logger.info(
            "Habit completion toggled",
            extra={"habit_id": habit_id, "day": day.isoformat(), "completed": saved.completed},
        )
        return saved

    def delete_log(self, habit_id: int, occurred_on: date, *, today=None) -> bool:
        """Remove the log for a day and refresh the streak cache."""
        day = _require_day(occurred_on)
        with self.session_factory() as session:
            entry = session.exec(
                select(HabitLog)
                .where(HabitLog.habit_id == habit_id)
                .where(HabitLog.occurred_on == day)
            ).first()
            if not entry:
                return False
            session.delete(entry)
            session.commit()
            self._refresh_in_session(session, habit_id, today=today)
            session.commit()
            return True

    def refresh_streak(self, habit_id: int, *, today=None) -> Habit:
        """Recompute the cached streak fields from the full log set."""
        with self.session_factory() as session:
            habit = self._refresh_in_session(session, habit_id, today=today)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def _refresh_in_session(self, session: Session, habit_id: int, *, today=None) -> Habit:
        habit = session.get(Habit, habit_id)
        if habit is None:
            raise HabitNotFoundError(habit_id)
        logs = session.exec(select(HabitLog).where(HabitLog.habit_id == habit_id)).all()
        snapshot = streak_snapshot(logs, today=today)
        habit.streak = snapshot.current
        habit.last_completed = snapshot.last_completed
        session.add(habit)
        logger.debug(
            "Streak cache refreshed",
            extra={"habit_id": habit_id, "streak": snapshot.current},
        )
        return habit
