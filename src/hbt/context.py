"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.engine import Engine

from .config import BaseConfig
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories import (
    SQLModelCategoryRepository,
    SQLModelCompletionRepository,
    SQLModelHabitRepository,
    SQLModelSettingsRepository,
)
from .services.stats import StatisticsService


@dataclass
class AppContext:
    """Centralized application context with repositories and services."""

    config: BaseConfig
    engine: Engine
    session_factory: SessionFactory

    habit_repo: SQLModelHabitRepository
    completion_repo: SQLModelCompletionRepository
    category_repo: SQLModelCategoryRepository
    settings_repo: SQLModelSettingsRepository

    stats: StatisticsService

    def close(self) -> None:
        self.engine.dispose()


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create the engine, initialize the schema and wire repositories."""

    if config is None:
        config = BaseConfig()

    engine, session_factory = bootstrap_database(config)

    habit_repo = SQLModelHabitRepository(session_factory)
    completion_repo = SQLModelCompletionRepository(session_factory)
    category_repo = SQLModelCategoryRepository(session_factory)
    settings_repo = SQLModelSettingsRepository(session_factory)

    return AppContext(
        config=config,
        engine=engine,
        session_factory=session_factory,
        habit_repo=habit_repo,
        completion_repo=completion_repo,
        category_repo=category_repo,
        settings_repo=settings_repo,
        stats=StatisticsService(habit_repo, completion_repo, category_repo),
    )
