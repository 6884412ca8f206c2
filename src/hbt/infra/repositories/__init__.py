"""Concrete repository implementations using SQLModel."""

from .category import SQLModelCategoryRepository
from .completion import SQLModelCompletionRepository
from .habit import SQLModelHabitRepository
from .settings import SQLModelSettingsRepository

__all__ = [
    "SQLModelCategoryRepository",
    "SQLModelCompletionRepository",
    "SQLModelHabitRepository",
    "SQLModelSettingsRepository",
]
