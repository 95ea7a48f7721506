"""Rule-based insights derived from habit analytics.

Rules are evaluated independently and emitted in a fixed order, so callers can
render the list as-is. Insight ids are derived from the habit id and the rule,
which keeps them stable across recomputation.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Iterable, Optional, Union

from ..logging_config import get_logger
from ..models.habit import Habit
from .analytics import (
    DEFAULT_WINDOW_DAYS,
    HabitAnalytics,
    calculate_analytics,
    category_stats,
    overall_completion_rate,
    round_half_up,
)
from .habit_logs import ensure_collection

logger = get_logger(__name__)

GREAT_STREAK_DAYS = 7
PERSONAL_BEST_MIN_DAYS = 5
HIGH_COMPLETION_RATE = 80
LOW_COMPLETION_RATE = 50
HIGH_CONSISTENCY = 90
LOW_CONSISTENCY = 60
POSITIVE_MOOD = 4
CATEGORY_LEADER_MARGIN = 20
SIBLING_RATE_PLACEHOLDER = 70.0
OVERALL_EXCELLENT_RATE = 75
STRONGEST_CATEGORY_RATE = 80


class InsightType(str, Enum):
    STREAK = "streak"
    COMPLETION = "completion"
    CONSISTENCY = "consistency"
    MOOD = "mood"
    RECOMMENDATION = "recommendation"


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


@dataclass(slots=True)
class HabitInsight:
    """A human-readable observation, optionally with a suggested action."""

    id: str
    type: InsightType
    title: str
    description: str
    value: Optional[Union[str, int, float]] = None
    trend: Optional[Trend] = None
    actionable: bool = False
    suggestion: Optional[str] = None

    def as_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["type"] = self.type.value
        data["trend"] = self.trend.value if self.trend else None
        return data


def _format_rate(rate: float) -> str:
    """Render a percentage without a trailing ``.0``."""

    return f"{rate:g}%"


def _sibling_average(
    siblings: list[Habit],
    *,
    logs: Optional[list],
    today,
    window_days: int,
    placeholder: float,
) -> float:
    if logs is None:
        return placeholder
    rates = [
        calculate_analytics(s, logs, today=today, window_days=window_days).completion_rate
        for s in siblings
    ]
    return sum(rates) / len(rates)


def generate_insights(
    habit: Habit,
    analytics: HabitAnalytics,
    all_habits: Iterable[Habit],
    *,
    logs: Optional[Iterable] = None,
    today=None,
    window_days: int = DEFAULT_WINDOW_DAYS,
    sibling_rate_placeholder: float = SIBLING_RATE_PLACEHOLDER,
) -> list[HabitInsight]:
    """Derive per-habit insights from ``analytics``.

    ``all_habits`` is used for the Category Leader comparison. When ``logs`` is
    given, sibling completion rates are computed for real; otherwise every
    sibling is assumed to sit at ``sibling_rate_placeholder``. Pass the same
    ``window_days`` that produced ``analytics`` so siblings are scored alike.
    """

    all_habits = ensure_collection(all_habits, "all_habits")
    logs = ensure_collection(logs, "logs") if logs is not None else None
    insights: list[HabitInsight] = []
    current = analytics.current_streak

    if current >= GREAT_STREAK_DAYS:
        insights.append(
            HabitInsight(
                id=f"streak-{habit.id}",
                type=InsightType.STREAK,
                title="Great Streak",
                description=f"You're on a {current}-day streak with {habit.name}",
                value=current,
                trend=Trend.UP,
            )
        )

    if current == analytics.longest_streak and current >= PERSONAL_BEST_MIN_DAYS:
        insights.append(
            HabitInsight(
                id=f"personal-best-{habit.id}",
                type=InsightType.STREAK,
                title="Personal Best",
                description=f"This is your longest streak for {habit.name}",
                value=analytics.longest_streak,
                trend=Trend.UP,
            )
        )

    rate = analytics.completion_rate
    if rate >= HIGH_COMPLETION_RATE:
        insights.append(
            HabitInsight(
                id=f"completion-high-{habit.id}",
                type=InsightType.COMPLETION,
                title="Excellent Consistency",
                description=f"{_format_rate(rate)} completion rate is outstanding",
                value=_format_rate(rate),
                trend=Trend.UP,
            )
        )
    elif rate < LOW_COMPLETION_RATE:
        insights.append(
            HabitInsight(
                id=f"completion-low-{habit.id}",
                type=InsightType.COMPLETION,
                title="Room for Improvement",
                description=f"{_format_rate(rate)} completion rate could be better",
                value=_format_rate(rate),
                trend=Trend.DOWN,
                actionable=True,
                suggestion="Try reducing the habit to a smaller, more manageable version",
            )
        )

    if analytics.consistency >= HIGH_CONSISTENCY:
        insights.append(
            HabitInsight(
                id=f"consistency-high-{habit.id}",
                type=InsightType.CONSISTENCY,
                title="Very Consistent",
                description=f"You're maintaining great consistency with {habit.name}",
                value=analytics.consistency,
                trend=Trend.STABLE,
            )
        )
    elif analytics.consistency < LOW_CONSISTENCY:
        insights.append(
            HabitInsight(
                id=f"consistency-low-{habit.id}",
                type=InsightType.CONSISTENCY,
                title="Inconsistent Pattern",
                description="Try to reduce gaps between completions",
                value=analytics.consistency,
                trend=Trend.DOWN,
                actionable=True,
                suggestion="Set up reminders or pair this habit with an existing routine",
            )
        )

    if analytics.average_mood is not None and analytics.average_mood >= POSITIVE_MOOD:
        insights.append(
            HabitInsight(
                id=f"mood-positive-{habit.id}",
                type=InsightType.MOOD,
                title="Positive Impact",
                description=f"{habit.name} seems to boost your mood",
                value=f"{analytics.average_mood:.1f}",
                trend=Trend.UP,
            )
        )

    if analytics.best_day:
        insights.append(
            HabitInsight(
                id=f"best-day-{habit.id}",
                type=InsightType.COMPLETION,
                title="Best Day Pattern",
                description=f"You complete {habit.name} most often on {analytics.best_day}",
                value=analytics.best_day,
                trend=Trend.STABLE,
                actionable=True,
                suggestion="Consider scheduling this habit on your most successful day",
            )
        )

    siblings = [h for h in all_habits if h.category == habit.category and h.id != habit.id]
    if siblings:
        sibling_rate = _sibling_average(
            siblings,
            logs=logs,
            today=today,
            window_days=window_days,
            placeholder=sibling_rate_placeholder,
        )
        if rate > sibling_rate + CATEGORY_LEADER_MARGIN:
            insights.append(
                HabitInsight(
                    id=f"category-leader-{habit.id}",
                    type=InsightType.RECOMMENDATION,
                    title="Category Leader",
                    description=f"You're excelling in {habit.category} habits",
                    trend=Trend.UP,
                    actionable=True,
                    suggestion="Consider adding another habit in this category",
                )
            )

    logger.debug(
        "Generated habit insights",
        extra={"habit_id": habit.id, "count": len(insights)},
    )
    return insights


def get_overall_insights(all_habits: Iterable[Habit], all_logs: Iterable) -> list[HabitInsight]:
    """Cross-habit insights: overall completion and the strongest category."""

    all_habits = ensure_collection(all_habits, "all_habits")
    all_logs = ensure_collection(all_logs, "all_logs")
    insights: list[HabitInsight] = []

    overall = overall_completion_rate(all_habits, all_logs)
    if overall >= OVERALL_EXCELLENT_RATE:
        shown = int(round_half_up(overall))
        insights.append(
            HabitInsight(
                id="overall-excellent",
                type=InsightType.COMPLETION,
                title="Excellent Overall Progress",
                description=f"{shown}% completion rate across all habits",
                value=f"{shown}%",
                trend=Trend.UP,
            )
        )

    stats = category_stats(all_habits, all_logs)
    if stats:
        # max() keeps the first category on ties, i.e. the first one seen.
        name, best = max(stats.items(), key=lambda item: item[1].completion_rate)
        if best.completion_rate > STRONGEST_CATEGORY_RATE:
            shown = int(round_half_up(best.completion_rate))
            insights.append(
                HabitInsight(
                    id="best-category",
                    type=InsightType.RECOMMENDATION,
                    title="Strongest Category",
                    description=f"You excel at {name} habits",
                    value=f"{shown}%",
                    trend=Trend.UP,
                    actionable=True,
                    suggestion="Consider adding more habits in this successful category",
                )
            )

    return insights


__all__ = [
    "HabitInsight",
    "InsightType",
    "Trend",
    "generate_insights",
    "get_overall_insights",
]
