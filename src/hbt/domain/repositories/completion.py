"""Completion store protocol consumed by the statistics services."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Protocol

from ...models.habit import Completion


class CompletionRepository(Protocol):
    """Durable set of (habit, date, note) completion records."""

    def add(self, habit_id: int, completed_on: date, notes: str = "") -> Completion:
        """Record one completion."""
        ...

    def remove_one(self, habit_id: int, completed_on: date) -> bool:
        """Delete a single completion on a day."""
        ...

    def completion_dates_for(self, habit_id: int) -> list[date]:
        """All completion dates of a habit, oldest first."""
        ...

    def count_completions_on(self, habit_id: int, day: date) -> int:
        """Number of completions of a habit on a day."""
        ...

    def count_completions_in_week(self, habit_id: int, week_start: date) -> int:
        """Number of completions in the week starting at ``week_start``."""
        ...

    def completions_in_range(self, habit_id: int, start: date, end: date) -> list[Completion]:
        """Completions of a habit between two days inclusive."""
        ...

    def completions_for_habits(
        self, habit_ids: Iterable[int], start: date | None = None, end: date | None = None
    ) -> list[Completion]:
        """Completions across several habits."""
        ...
