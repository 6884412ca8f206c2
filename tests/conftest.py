"""Pytest configuration and shared fixtures for hbt tests.

This module provides database fixtures, test data factories, and repository
wiring for testing the statistics core without touching the real data
directory.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest
from sqlmodel import Session

from hbt.config import BaseConfig
from hbt.infra.database import bootstrap_database
from hbt.infra.repositories import (
    SQLModelCategoryRepository,
    SQLModelCompletionRepository,
    SQLModelHabitRepository,
    SQLModelSettingsRepository,
)
from hbt.models import Category, Completion, Habit
from hbt.services.stats import StatisticsService

# Thursday; the surrounding Monday-start week runs 2024-03-11 .. 2024-03-17
TODAY = date(2024, 3, 14)


def days_ago(n: int, *, today: date = TODAY) -> date:
    return today - timedelta(days=n)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def config(tmp_path, monkeypatch) -> BaseConfig:
    """Configuration pointing at a throwaway data directory."""

    monkeypatch.setenv("HBT_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("HBT_DATABASE_URL", f"sqlite:///{tmp_path / 'test.db'}")
    monkeypatch.delenv("HBT_DEV_MODE", raising=False)
    return BaseConfig()


@pytest.fixture
def db_engine(config):
    """Create an isolated SQLite database for each test.

    Yields:
        Engine: engine with the schema created and SQLite pragmas applied
    """
    engine, _ = bootstrap_database(config)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    """Session factory matching what repositories expect."""

    from hbt.infra.database import create_session_factory

    return create_session_factory(db_engine)


@pytest.fixture
def db_session(db_engine):
    """Raw session for arranging test data directly."""

    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture
def habit_repo(session_factory) -> SQLModelHabitRepository:
    return SQLModelHabitRepository(session_factory)


@pytest.fixture
def completion_repo(session_factory) -> SQLModelCompletionRepository:
    return SQLModelCompletionRepository(session_factory)


@pytest.fixture
def category_repo(session_factory) -> SQLModelCategoryRepository:
    return SQLModelCategoryRepository(session_factory)


@pytest.fixture
def settings_repo(session_factory) -> SQLModelSettingsRepository:
    return SQLModelSettingsRepository(session_factory)


@pytest.fixture
def stats_service(habit_repo, completion_repo, category_repo) -> StatisticsService:
    return StatisticsService(habit_repo, completion_repo, category_repo)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def category_factory(db_session):
    """Factory for creating test categories."""

    def _create_category(name: str = "Health", color: str = "#96CEB4", emoji: str = "") -> Category:
        category = Category(name=name, color=color, emoji=emoji)
        db_session.add(category)
        db_session.commit()
        db_session.refresh(category)
        return category

    return _create_category


@pytest.fixture
def habit_factory(db_session):
    """Factory for creating test habits.

    Habits default to daily frequency, created well before ``TODAY``.
    """

    def _create_habit(
        name: str = "Test Habit",
        frequency_type: str = "daily",
        frequency_value: int = 1,
        target_per_day: int = 1,
        created_on: date = date(2024, 1, 1),
        archived: bool = False,
        category_id: int | None = None,
    ) -> Habit:
        habit = Habit(
            name=name,
            frequency_type=frequency_type,
            frequency_value=frequency_value,
            target_per_day=target_per_day,
            created_at=datetime.combine(created_on, datetime.min.time()).replace(hour=9),
            archived_at=datetime(2024, 3, 1, 12, 0) if archived else None,
            category_id=category_id,
        )
        db_session.add(habit)
        db_session.commit()
        db_session.refresh(habit)
        return habit

    return _create_habit


@pytest.fixture
def completion_factory(db_session):
    """Factory adding one or more completion records for a habit on a day."""

    def _complete(habit: Habit, day: date, count: int = 1, notes: str = "") -> list[Completion]:
        rows = [Completion(habit_id=habit.id, completed_on=day, notes=notes) for _ in range(count)]
        db_session.add_all(rows)
        db_session.commit()
        return rows

    return _complete
