"""SQLModel table exports."""

from .category import Category
from .habit import Completion, FrequencyType, Habit
from .settings import AppSetting

__all__ = [
    "AppSetting",
    "Category",
    "Completion",
    "FrequencyType",
    "Habit",
]
