"""Normalize raw habit logs into one record per habit per calendar day."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ..logging_config import get_logger
from .dates import to_day

logger = get_logger(__name__)

RATING_RANGE = range(1, 6)


@dataclass(frozen=True, slots=True)
class DayLog:
    """Read-only copy of a habit log pinned to its calendar day."""

    habit_id: Any
    day: date
    completed: bool
    mood: Optional[int] = None
    effort: Optional[int] = None
    log_id: Any = None
    notes: Optional[str] = None

    # Mirror the HabitLog attribute names so resolved logs can be fed back in.
    @property
    def occurred_on(self) -> date:
        return self.day

    @property
    def id(self) -> Any:
        return self.log_id


def ensure_collection(value, name: str) -> list:
    """Return ``value`` as a list; ``None`` counts as empty.

    Strings and mappings are iterable but never a valid habit/log list, so they
    are rejected along with non-iterables.
    """

    if value is None:
        return []
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
        raise TypeError(f"{name} must be a list, got {type(value).__name__}")
    return list(value)


def _rating(value) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value in RATING_RANGE else None


def resolve_logs(
    logs,
    *,
    habit_id: Any = None,
    known_habit_ids: Optional[set] = None,
) -> list[DayLog]:
    """Collapse ``logs`` to one :class:`DayLog` per (habit, day).

    Duplicate same-day entries resolve last-write-wins by input order. Logs with a
    non-date ``occurred_on`` or a habit reference outside ``known_habit_ids`` are
    skipped with a warning. When ``habit_id`` is given, logs of other habits are
    ignored.
    """

    resolved: dict[tuple[Any, date], DayLog] = {}
    for raw in ensure_collection(logs, "logs"):
        ref = getattr(raw, "habit_id", None)
        if habit_id is not None and ref != habit_id:
            continue
        if known_habit_ids is not None and ref not in known_habit_ids:
            logger.warning(
                "Skipping log for unknown habit",
                extra={"habit_id": ref, "log_id": getattr(raw, "id", None)},
            )
            continue
        day = to_day(getattr(raw, "occurred_on", None))
        if day is None:
            logger.warning(
                "Skipping log with malformed date",
                extra={"habit_id": ref, "log_id": getattr(raw, "id", None)},
            )
            continue
        resolved[(ref, day)] = DayLog(
            habit_id=ref,
            day=day,
            completed=bool(getattr(raw, "completed", False)),
            mood=_rating(getattr(raw, "mood", None)),
            effort=_rating(getattr(raw, "effort", None)),
            log_id=getattr(raw, "id", None),
            notes=getattr(raw, "notes", None),
        )
    return list(resolved.values())


def completed_days(logs, *, habit_id: Any = None) -> list[date]:
    """Sorted distinct calendar days with a completed log."""

    return sorted({entry.day for entry in resolve_logs(logs, habit_id=habit_id) if entry.completed})


__all__ = ["DayLog", "completed_days", "ensure_collection", "resolve_logs"]
