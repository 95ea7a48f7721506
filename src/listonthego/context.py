"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from sqlmodel import Session

from .config import BaseConfig
from .domain.repositories import CategoryRepository, HabitRepository
from .infra.database import bootstrap_database
from .infra.repositories import SQLModelCategoryRepository, SQLModelHabitRepository


@dataclass
class AppContext:
    """Configuration plus the repositories built on top of it."""

    config: BaseConfig
    session_factory: Callable[[], Session]
    habit_repo: HabitRepository
    category_repo: CategoryRepository


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create the engine, initialize the schema and wire the repositories."""

    if config is None:
        config = BaseConfig()

    _engine, session_factory = bootstrap_database(config)
    return AppContext(
        config=config,
        session_factory=session_factory,
        habit_repo=SQLModelHabitRepository(session_factory),
        category_repo=SQLModelCategoryRepository(session_factory),
    )
