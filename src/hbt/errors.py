"""Exception hierarchy shared by the store, services and CLI."""

from __future__ import annotations


class HabitTrackerError(Exception):
    """Base class for all errors raised by hbt."""


class StoreUnavailable(HabitTrackerError):
    """Reading from or writing to the database failed."""


class HabitNotFound(HabitTrackerError, LookupError):
    """A habit id did not match any stored habit."""

    def __init__(self, habit_id: int):
        super().__init__(f"No habit with id {habit_id}")
        self.habit_id = habit_id


class CategoryNotFound(HabitTrackerError, LookupError):
    """A category id did not match any stored category."""

    def __init__(self, category_id: int):
        super().__init__(f"No category with id {category_id}")
        self.category_id = category_id


class InvalidHabitConfiguration(HabitTrackerError, ValueError):
    """Habit fields failed validation on create or update."""
