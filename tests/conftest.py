"""Pytest configuration and shared fixtures for ListOnTheGo tests.

Pure-service tests build unsaved rows with ``factories.py``; repository tests
get an isolated in-memory database per test.
"""

from __future__ import annotations

import logging

import pytest

from listonthego.config import TestConfig
from listonthego.infra.database import bootstrap_database, create_session_factory
from listonthego.infra.repositories import SQLModelCategoryRepository, SQLModelHabitRepository
from listonthego.models import Habit

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def config(tmp_path) -> TestConfig:
    """Test configuration rooted in a per-test temp directory."""
    return TestConfig(tmp_path)


@pytest.fixture(scope="function")
def db_engine(config):
    """Create an isolated in-memory SQLite database for each test.

    Yields:
        Engine: SQLModel engine with all tables created
    """
    engine, _ = bootstrap_database(config)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching what the repositories expect."""
    return create_session_factory(db_engine)


@pytest.fixture
def habit_repo(session_factory) -> SQLModelHabitRepository:
    return SQLModelHabitRepository(session_factory)


@pytest.fixture
def category_repo(session_factory) -> SQLModelCategoryRepository:
    return SQLModelCategoryRepository(session_factory)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def habit_factory(habit_repo):
    """Factory for creating persisted habits.

    Returns:
        Callable: Function that creates and persists Habit instances
    """

    def _create_habit(
        name: str = "Test Habit",
        category: str = "Health",
        frequency: str = "daily",
        description: str = "Test habit description",
    ) -> Habit:
        return habit_repo.create(
            Habit(name=name, category=category, frequency=frequency, description=description)
        )

    return _create_habit


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture
def reset_logger():
    """Detach handlers installed by ``setup_logging`` once the test is done."""
    yield
    logger = logging.getLogger("listonthego")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
