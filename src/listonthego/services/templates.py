"""Built-in catalog of habit templates and lookups over it.

The catalog is immutable module data; every lookup returns templates in
catalog order.
"""

from __future__ import annotations

import random
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Optional

from ..models.habit import Habit, HabitFrequency

BEGINNER_MAX_MINUTES = 15
ALL_CATEGORIES = "all"


class TemplateCategory(str, Enum):
    POPULAR = "popular"
    HEALTH = "health"
    PRODUCTIVITY = "productivity"
    MINDFULNESS = "mindfulness"
    FITNESS = "fitness"
    LEARNING = "learning"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True, slots=True)
class HabitTemplate:
    """A ready-made habit definition with coaching notes."""

    id: str
    name: str
    description: str
    frequency: str
    category: str
    template_category: TemplateCategory
    goal: Optional[int]
    color: Optional[str]
    tags: tuple[str, ...]
    difficulty: Difficulty
    estimated_minutes: int
    benefits: tuple[str, ...] = ()
    tips: tuple[str, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["template_category"] = self.template_category.value
        data["difficulty"] = self.difficulty.value
        data["tags"] = list(self.tags)
        data["benefits"] = list(self.benefits)
        data["tips"] = list(self.tips)
        return data

    def to_habit(self) -> Habit:
        """Unsaved :class:`Habit` pre-filled from this template."""
        return Habit(
            name=self.name,
            description=self.description,
            frequency=self.frequency,
            category=self.category,
            goal=self.goal,
            color=self.color,
        )


_DAILY = HabitFrequency.DAILY.value
_WEEKLY = HabitFrequency.WEEKLY.value

TEMPLATES: tuple[HabitTemplate, ...] = (
    HabitTemplate(
        id="template-1",
        name="Morning Meditation",
        description="Start your day with 10 minutes of mindfulness meditation",
        frequency=_DAILY,
        category="Mindfulness",
        template_category=TemplateCategory.POPULAR,
        goal=30,
        color="#6B7280",
        tags=("mindfulness", "morning", "wellness"),
        difficulty=Difficulty.EASY,
        estimated_minutes=10,
        benefits=("Reduced stress", "Better focus", "Improved emotional regulation"),
        tips=("Start with just 5 minutes", "Use a meditation app", "Create a quiet space"),
    ),
    HabitTemplate(
        id="template-2",
        name="Daily Exercise",
        description="Get your body moving with 30 minutes of physical activity",
        frequency=_DAILY,
        category="Fitness",
        template_category=TemplateCategory.POPULAR,
        goal=21,
        color="#374151",
        tags=("fitness", "health", "energy"),
        difficulty=Difficulty.MEDIUM,
        estimated_minutes=30,
        benefits=("Improved cardiovascular health", "Increased energy", "Better sleep"),
        tips=("Start with 15 minutes", "Find activities you enjoy", "Schedule it like an appointment"),
    ),
    HabitTemplate(
        id="template-3",
        name="Read Daily",
        description="Expand your knowledge by reading for 20 minutes each day",
        frequency=_DAILY,
        category="Learning",
        template_category=TemplateCategory.POPULAR,
        goal=50,
        color="#4B5563",
        tags=("learning", "books", "knowledge"),
        difficulty=Difficulty.EASY,
        estimated_minutes=20,
        benefits=("Expanded vocabulary", "Increased knowledge", "Better focus"),
        tips=("Keep a book nearby", "Set a specific time", "Start with topics you enjoy"),
    ),
    HabitTemplate(
        id="template-4",
        name="Drink 8 Glasses of Water",
        description="Stay hydrated throughout the day",
        frequency=_DAILY,
        category="Health",
        template_category=TemplateCategory.HEALTH,
        goal=30,
        color="#000000",
        tags=("hydration", "health", "wellness"),
        difficulty=Difficulty.EASY,
        estimated_minutes=0,
        benefits=("Better skin", "Improved energy", "Better digestion"),
        tips=("Use a water bottle with markers", "Set hourly reminders", "Flavor with lemon"),
    ),
    HabitTemplate(
        id="template-5",
        name="Take Vitamins",
        description="Remember to take your daily vitamins and supplements",
        frequency=_DAILY,
        category="Health",
        template_category=TemplateCategory.HEALTH,
        goal=90,
        color="#000000",
        tags=("vitamins", "health", "supplements"),
        difficulty=Difficulty.EASY,
        estimated_minutes=1,
        benefits=("Better immune system", "Improved nutrition", "Better energy"),
        tips=("Set them next to your coffee", "Use a pill organizer", "Take with food"),
    ),
    HabitTemplate(
        id="template-6",
        name="Sleep 8 Hours",
        description="Get quality sleep for optimal health",
        frequency=_DAILY,
        category="Health",
        template_category=TemplateCategory.HEALTH,
        goal=21,
        color="#000000",
        tags=("sleep", "rest", "recovery"),
        difficulty=Difficulty.MEDIUM,
        estimated_minutes=480,
        benefits=("Better mood", "Improved focus", "Better immune system"),
        tips=("Set a bedtime routine", "No screens before bed", "Keep room cool and dark"),
    ),
    HabitTemplate(
        id="template-7",
        name="Plan Tomorrow",
        description="Spend 10 minutes planning your next day",
        frequency=_DAILY,
        category="Productivity",
        template_category=TemplateCategory.PRODUCTIVITY,
        goal=30,
        color="#4B5563",
        tags=("planning", "productivity", "organization"),
        difficulty=Difficulty.EASY,
        estimated_minutes=10,
        benefits=("Better time management", "Reduced stress", "Clearer priorities"),
        tips=("Do it before bed", "Keep it simple", "Focus on top 3 priorities"),
    ),
    HabitTemplate(
        id="template-8",
        name="Deep Work Session",
        description="2 hours of focused, uninterrupted work",
        frequency=_DAILY,
        category="Productivity",
        template_category=TemplateCategory.PRODUCTIVITY,
        goal=14,
        color="#4B5563",
        tags=("focus", "productivity", "work"),
        difficulty=Difficulty.HARD,
        estimated_minutes=120,
        benefits=("Higher quality output", "Faster progress", "Reduced multitasking"),
        tips=("Turn off notifications", "Block distracting websites", "Take breaks every 45 minutes"),
    ),
    HabitTemplate(
        id="template-9",
        name="Gratitude Journal",
        description="Write down 3 things you're grateful for",
        frequency=_DAILY,
        category="Mindfulness",
        template_category=TemplateCategory.MINDFULNESS,
        goal=30,
        color="#6B7280",
        tags=("gratitude", "mindfulness", "positivity"),
        difficulty=Difficulty.EASY,
        estimated_minutes=5,
        benefits=("Improved mood", "Better relationships", "Increased optimism"),
        tips=("Be specific", "Include why you're grateful", "Do it at the same time daily"),
    ),
    HabitTemplate(
        id="template-10",
        name="Digital Detox Hour",
        description="One hour without any digital devices",
        frequency=_DAILY,
        category="Mindfulness",
        template_category=TemplateCategory.MINDFULNESS,
        goal=21,
        color="#6B7280",
        tags=("digital detox", "mindfulness", "presence"),
        difficulty=Difficulty.MEDIUM,
        estimated_minutes=60,
        benefits=("Reduced anxiety", "Better sleep", "Increased presence"),
        tips=("Start with 30 minutes", "Have analog activities ready", "Tell others about your detox time"),
    ),
    HabitTemplate(
        id="template-11",
        name="10,000 Steps",
        description="Walk at least 10,000 steps each day",
        frequency=_DAILY,
        category="Fitness",
        template_category=TemplateCategory.FITNESS,
        goal=30,
        color="#374151",
        tags=("walking", "fitness", "cardio"),
        difficulty=Difficulty.MEDIUM,
        estimated_minutes=90,
        benefits=("Better cardiovascular health", "Weight management", "Improved mood"),
        tips=("Park farther away", "Take stairs", "Walk during phone calls"),
    ),
    HabitTemplate(
        id="template-12",
        name="Strength Training",
        description="Complete a strength training workout",
        frequency=_WEEKLY,
        category="Fitness",
        template_category=TemplateCategory.FITNESS,
        goal=3,
        color="#374151",
        tags=("strength", "fitness", "muscle"),
        difficulty=Difficulty.MEDIUM,
        estimated_minutes=45,
        benefits=("Increased strength", "Better bone density", "Improved metabolism"),
        tips=("Start with bodyweight exercises", "Focus on form", "Progress gradually"),
    ),
    HabitTemplate(
        id="template-13",
        name="Learn a New Language",
        description="Practice a foreign language for 15 minutes",
        frequency=_DAILY,
        category="Learning",
        template_category=TemplateCategory.LEARNING,
        goal=90,
        color="#4B5563",
        tags=("language", "learning", "culture"),
        difficulty=Difficulty.MEDIUM,
        estimated_minutes=15,
        benefits=("Cognitive benefits", "Cultural understanding", "Career opportunities"),
        tips=("Use language apps", "Practice speaking", "Immerse yourself in content"),
    ),
    HabitTemplate(
        id="template-14",
        name="Learn Something New",
        description="Dedicate time to learning a new skill or topic",
        frequency=_WEEKLY,
        category="Learning",
        template_category=TemplateCategory.LEARNING,
        goal=4,
        color="#4B5563",
        tags=("skill", "learning", "growth"),
        difficulty=Difficulty.EASY,
        estimated_minutes=60,
        benefits=("Personal growth", "Career development", "Mental stimulation"),
        tips=("Choose topics you're curious about", "Use online courses", "Practice regularly"),
    ),
)

TEMPLATE_CATEGORIES = (ALL_CATEGORIES, *(category.value for category in TemplateCategory))
DIFFICULTY_LEVELS = tuple(level.value for level in Difficulty)


def get_templates_by_category(category: Optional[str] = None) -> list[HabitTemplate]:
    """Templates in ``category``; ``None``, empty or ``"all"`` returns the whole catalog."""

    key = getattr(category, "value", category)
    if not key or key == ALL_CATEGORIES:
        return list(TEMPLATES)
    return [t for t in TEMPLATES if t.template_category.value == key]


def get_popular_templates() -> list[HabitTemplate]:
    return get_templates_by_category(TemplateCategory.POPULAR)


def get_template_by_id(template_id: str) -> Optional[HabitTemplate]:
    return next((t for t in TEMPLATES if t.id == template_id), None)


def search_templates(query: str) -> list[HabitTemplate]:
    """Case-insensitive substring match on name, description and tags."""

    needle = query.lower()
    return [
        t
        for t in TEMPLATES
        if needle in t.name.lower()
        or needle in t.description.lower()
        or any(needle in tag.lower() for tag in t.tags)
    ]


def get_templates_by_difficulty(difficulty: str) -> list[HabitTemplate]:
    key = getattr(difficulty, "value", difficulty)
    return [t for t in TEMPLATES if t.difficulty.value == key]


def get_templates_for_beginner() -> list[HabitTemplate]:
    """Easy templates that take at most a quarter of an hour."""

    return [
        t
        for t in TEMPLATES
        if t.difficulty is Difficulty.EASY and t.estimated_minutes <= BEGINNER_MAX_MINUTES
    ]


def random_template(rng: Optional[random.Random] = None) -> HabitTemplate:
    """Pick one template; pass a seeded ``rng`` for a repeatable choice."""

    return (rng or random).choice(TEMPLATES)


__all__ = [
    "DIFFICULTY_LEVELS",
    "Difficulty",
    "HabitTemplate",
    "TEMPLATES",
    "TEMPLATE_CATEGORIES",
    "TemplateCategory",
    "get_popular_templates",
    "get_template_by_id",
    "get_templates_by_category",
    "get_templates_by_difficulty",
    "get_templates_for_beginner",
    "random_template",
    "search_templates",
]
