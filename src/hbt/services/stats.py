"""Statistics facade: the read views the presentation layer renders.

Everything is recomputed from the store on each call. Store failures
propagate as ``StoreUnavailable`` and abort the whole call; no partial
results are returned.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Optional

from ..domain.repositories import CategoryRepository, CompletionRepository, HabitRepository
from ..logging_config import get_logger
from ..models.category import Category
from ..models.habit import Completion, Habit
from .aggregates import (
    DailyStat,
    completion_rate,
    daily_series,
    elapsed_days,
    overview_totals,
    weekly_series,
)
from .frequency import habit_is_due, week_start
from .habits import require_habit
from .streaks import compute_streaks

logger = get_logger("services.stats")


@dataclass(slots=True)
class HabitStatus:
    """Read-only projection of one habit for today's checklist."""

    habit: Habit
    category: Optional[Category]
    completions_today: int
    completions_this_week: int
    current_streak: int
    best_streak: int
    is_due: bool

    @property
    def completed_today(self) -> bool:
        return self.completions_today >= self.habit.target_per_day


@dataclass(slots=True)
class HabitStat:
    """Lifetime statistics for a single habit.

    ``completed_days`` counts completion records, so a habit done several
    times a day can go past 100%.
    """

    habit_id: int
    habit_name: str
    completed_days: int
    total_days: int
    completion_rate: float
    current_streak: int
    best_streak: int


@dataclass(slots=True)
class Overview:
    """Global numbers plus trailing series for charting."""

    total_habits: int
    total_completions: int
    total_possible: int
    overall_rate: float
    current_best_streak: int
    all_time_best_streak: int
    daily_series: list[DailyStat] = field(default_factory=list)
    weekly_series: list[DailyStat] = field(default_factory=list)


def _dates_by_habit(completions: list[Completion]) -> dict[int, list[date]]:
    grouped: dict[int, list[date]] = defaultdict(list)
    for completion in completions:
        grouped[completion.habit_id].append(completion.completed_on)
    return grouped


class StatisticsService:
    """Compose the frequency policy, streaks and aggregation over the store."""

    def __init__(
        self,
        habit_repo: HabitRepository,
        completion_repo: CompletionRepository,
        category_repo: CategoryRepository,
    ):
        self.habit_repo = habit_repo
        self.completion_repo = completion_repo
        self.category_repo = category_repo

    def get_today_status(self, today: date | None = None) -> list[HabitStatus]:
        """Status of every active habit for ``today``, ordered by name."""

        today = today or date.today()
        habits = self.habit_repo.active_habits()
        categories = self.category_repo.get_many(
            {h.category_id for h in habits if h.category_id is not None}
        )
        monday = week_start(today)

        statuses: list[HabitStatus] = []
        for habit in habits:
            dates = self.completion_repo.completion_dates_for(habit.id)
            completions_today = self.completion_repo.count_completions_on(habit.id, today)
            completions_this_week = self.completion_repo.count_completions_in_week(habit.id, monday)
            current, best = compute_streaks(dates, today=today)
            statuses.append(
                HabitStatus(
                    habit=habit,
                    category=categories.get(habit.category_id) if habit.category_id else None,
                    completions_today=completions_today,
                    completions_this_week=completions_this_week,
                    current_streak=current,
                    best_streak=best,
                    is_due=habit_is_due(habit, completions_this_week),
                )
            )
        return statuses

    def _active_with_completions(self) -> tuple[list[Habit], list[Completion]]:
        habits = self.habit_repo.active_habits()
        completions = self.completion_repo.completions_for_habits(
            [h.id for h in habits if h.id is not None]
        )
        return habits, completions

    def get_overview(self, today: date | None = None, *, days: int = 7, weeks: int = 4) -> Overview:
        """Overall rate, best streaks and the trailing daily/weekly series."""

        today = today or date.today()
        habits, completions = self._active_with_completions()
        total_completions, total_possible = overview_totals(habits, completions, today=today)

        current_best = 0
        all_time_best = 0
        for dates in _dates_by_habit(completions).values():
            current, best = compute_streaks(dates, today=today)
            current_best = max(current_best, current)
            all_time_best = max(all_time_best, best)

        overview = Overview(
            total_habits=len(habits),
            total_completions=total_completions,
            total_possible=total_possible,
            overall_rate=completion_rate(total_completions, total_possible),
            current_best_streak=current_best,
            all_time_best_streak=all_time_best,
            daily_series=daily_series(habits, completions, days, today=today),
            weekly_series=weekly_series(habits, completions, weeks, today=today),
        )
        logger.debug(
            "Overview computed",
            extra={"total_habits": overview.total_habits, "overall_rate": overview.overall_rate},
        )
        return overview

    def get_daily_stats(self, days: int, today: date | None = None) -> list[DailyStat]:
        habits, completions = self._active_with_completions()
        return daily_series(habits, completions, days, today=today)

    def get_weekly_stats(self, weeks: int, today: date | None = None) -> list[DailyStat]:
        habits, completions = self._active_with_completions()
        return weekly_series(habits, completions, weeks, today=today)

    def get_habit_stats(self, today: date | None = None) -> list[HabitStat]:
        """One entry per active habit, sorted by name."""

        today = today or date.today()
        habits, completions = self._active_with_completions()
        grouped = _dates_by_habit(completions)

        stats: list[HabitStat] = []
        for habit in habits:
            dates = grouped.get(habit.id, [])
            current, best = compute_streaks(dates, today=today)
            completed_days = len(dates)
            total_days = elapsed_days(habit, today=today)
            stats.append(
                HabitStat(
                    habit_id=habit.id,
                    habit_name=habit.name,
                    completed_days=completed_days,
                    total_days=total_days,
                    completion_rate=completion_rate(completed_days, total_days),
                    current_streak=current,
                    best_streak=best,
                )
            )
        stats.sort(key=lambda s: s.habit_name)
        return stats

    def get_habit_history(
        self, habit_id: int, days: int = 30, today: date | None = None
    ) -> list[Completion]:
        """Completions of one habit over the trailing window, newest first."""

        today = today or date.today()
        require_habit(self.habit_repo, habit_id)
        start = today - timedelta(days=max(days, 1) - 1)
        return self.completion_repo.completions_in_range(habit_id, start, today)

    def toggle_completion(self, habit_id: int, today: date | None = None) -> bool:
        """Add a completion for today, or remove one if today already has any.

        Returns True when a completion was added and False when one was
        removed. Callers re-query statuses afterwards; nothing is cached.
        """

        today = today or date.today()
        require_habit(self.habit_repo, habit_id)
        if self.completion_repo.count_completions_on(habit_id, today) > 0:
            self.completion_repo.remove_one(habit_id, today)
            logger.info("Completion removed", extra={"habit_id": habit_id, "day": today})
            return False
        self.completion_repo.add(habit_id, today)
        logger.info("Completion added", extra={"habit_id": habit_id, "day": today})
        return True

    def complete(self, habit_id: int, notes: str = "", today: date | None = None) -> Completion:
        """Record one more completion for today with an optional note."""

        today = today or date.today()
        require_habit(self.habit_repo, habit_id)
        completion = self.completion_repo.add(habit_id, today, notes)
        logger.info("Completion added", extra={"habit_id": habit_id, "day": today, "notes": bool(notes)})
        return completion


__all__ = ["HabitStat", "HabitStatus", "Overview", "StatisticsService"]
