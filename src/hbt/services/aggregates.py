"""Period aggregation: trailing daily/weekly completion series.

Every function here is pure. Callers pass the habits and the completion
records to aggregate; archived habits are filtered out here so callers may
hand over whatever the store returned.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Sequence

from ..models.habit import Completion, FrequencyType, Habit
from .frequency import week_start


@dataclass(slots=True)
class DailyStat:
    """Completed vs due count for one day (or one week, keyed by its Monday)."""

    day: date
    completed: int
    total: int

    @property
    def rate(self) -> float:
        return completion_rate(self.completed, self.total)


def completion_rate(completed: int, total: int) -> float:
    """Percentage of ``completed`` over ``total``; 0 when nothing was possible."""

    if total <= 0:
        return 0.0
    return completed / total * 100


def _active(habits: Iterable[Habit]) -> list[Habit]:
    return [h for h in habits if not h.is_archived]


def _daily_habits(habits: Iterable[Habit]) -> list[Habit]:
    return [h for h in _active(habits) if h.frequency_type == FrequencyType.DAILY.value]


def daily_series(
    habits: Sequence[Habit],
    completions: Iterable[Completion],
    days: int,
    *,
    today: date | None = None,
) -> list[DailyStat]:
    """Per-day (completed, total) for the last ``days`` days, newest first.

    Only daily habits form the denominator: a habit counts on a day once it
    exists (created on or before that day). The numerator is the number of
    distinct habits from that set with at least one completion that day.
    """

    today = today or date.today()
    daily = _daily_habits(habits)
    daily_ids = {h.id for h in daily}

    done_by_day: dict[date, set[int]] = defaultdict(set)
    for completion in completions:
        if completion.habit_id in daily_ids:
            done_by_day[completion.completed_on].add(completion.habit_id)

    series: list[DailyStat] = []
    for offset in range(max(days, 0)):
        day = today - timedelta(days=offset)
        due_ids = {h.id for h in daily if h.created_on <= day}
        completed = len(done_by_day.get(day, set()) & due_ids)
        series.append(DailyStat(day=day, completed=completed, total=len(due_ids)))
    return series


def weekly_series(
    habits: Sequence[Habit],
    completions: Iterable[Completion],
    weeks: int,
    *,
    today: date | None = None,
) -> list[DailyStat]:
    """Per-week (completed, total) for the last ``weeks`` Monday-start weeks, newest first.

    ``total`` is seven times the number of daily habits existing by the
    week's Sunday. ``completed`` counts every completion record of any active
    habit in the week, whatever its frequency.
    """

    today = today or date.today()
    active_ids = {h.id for h in _active(habits)}
    daily = _daily_habits(habits)

    records_by_week: dict[date, int] = defaultdict(int)
    for completion in completions:
        if completion.habit_id in active_ids:
            records_by_week[week_start(completion.completed_on)] += 1

    current_week = week_start(today)
    series: list[DailyStat] = []
    for offset in range(max(weeks, 0)):
        start = current_week - timedelta(weeks=offset)
        end = start + timedelta(days=6)
        capacity = sum(1 for h in daily if h.created_on <= end) * 7
        series.append(DailyStat(day=start, completed=records_by_week.get(start, 0), total=capacity))
    return series


def elapsed_days(habit: Habit, *, today: date | None = None) -> int:
    """Days since creation, counting both the creation day and today."""

    today = today or date.today()
    return max((today - habit.created_on).days + 1, 0)


def overview_totals(
    habits: Sequence[Habit],
    completions: Iterable[Completion],
    *,
    today: date | None = None,
) -> tuple[int, int]:
    """Return (total_completions, total_possible) across active habits.

    ``total_possible`` only counts elapsed days of daily habits, while
    ``total_completions`` counts records of every active habit.
    """

    today = today or date.today()
    active_ids = {h.id for h in _active(habits)}
    total_completions = sum(1 for c in completions if c.habit_id in active_ids)
    total_possible = sum(elapsed_days(h, today=today) for h in _daily_habits(habits))
    return total_completions, total_possible


__all__ = [
    "DailyStat",
    "completion_rate",
    "daily_series",
    "elapsed_days",
    "overview_totals",
    "weekly_series",
]
