"""Tests for daily/weekly series and overview totals."""

from __future__ import annotations

from datetime import date, datetime, timedelta

from hbt.models import Completion, Habit
from hbt.services.aggregates import (
    DailyStat,
    completion_rate,
    daily_series,
    elapsed_days,
    overview_totals,
    weekly_series,
)

TODAY = date(2024, 3, 14)  # Thursday


def _habit(habit_id: int, frequency_type: str = "daily", created: date = date(2024, 1, 1), archived: bool = False) -> Habit:
    return Habit(
        id=habit_id,
        name=f"habit-{habit_id}",
        frequency_type=frequency_type,
        frequency_value=3,
        created_at=datetime.combine(created, datetime.min.time()),
        archived_at=datetime(2024, 2, 1) if archived else None,
    )


def _done(habit_id: int, day: date, count: int = 1) -> list[Completion]:
    return [Completion(habit_id=habit_id, completed_on=day) for _ in range(count)]


class TestCompletionRate:
    def test_zero_total_is_zero_percent(self):
        assert completion_rate(0, 0) == 0.0
        assert completion_rate(5, 0) == 0.0

    def test_percentage(self):
        assert completion_rate(1, 4) == 25.0

    def test_daily_stat_rate_property(self):
        assert DailyStat(day=TODAY, completed=2, total=4).rate == 50.0
        assert DailyStat(day=TODAY, completed=0, total=0).rate == 0.0


class TestDailySeries:
    def test_returns_requested_days_newest_first(self):
        series = daily_series([_habit(1)], [], 7, today=TODAY)
        assert len(series) == 7
        assert series[0].day == TODAY
        assert series[-1].day == TODAY - timedelta(days=6)

    def test_counts_distinct_habits_per_day(self):
        habits = [_habit(1), _habit(2)]
        completions = _done(1, TODAY, count=3) + _done(2, TODAY - timedelta(days=1))
        series = daily_series(habits, completions, 2, today=TODAY)
        assert (series[0].completed, series[0].total) == (1, 2)
        assert (series[1].completed, series[1].total) == (1, 2)

    def test_only_daily_habits_form_the_denominator(self):
        habits = [_habit(1), _habit(2, "weekly"), _habit(3, "times_per_week")]
        completions = _done(2, TODAY) + _done(3, TODAY) + _done(1, TODAY)
        today_stat = daily_series(habits, completions, 1, today=TODAY)[0]
        assert (today_stat.completed, today_stat.total) == (1, 1)

    def test_habit_counts_from_its_creation_day(self):
        habits = [_habit(1), _habit(2, created=TODAY - timedelta(days=1))]
        series = daily_series(habits, [], 3, today=TODAY)
        assert [s.total for s in series] == [2, 2, 1]

    def test_completion_before_creation_is_ignored(self):
        habit = _habit(1, created=TODAY)
        series = daily_series([habit], _done(1, TODAY - timedelta(days=1)), 2, today=TODAY)
        assert (series[1].completed, series[1].total) == (0, 0)

    def test_archived_habits_are_excluded(self):
        habits = [_habit(1), _habit(2, archived=True)]
        completions = _done(1, TODAY) + _done(2, TODAY)
        stat = daily_series(habits, completions, 1, today=TODAY)[0]
        assert (stat.completed, stat.total) == (1, 1)

    def test_day_without_daily_habits_has_zero_total(self):
        series = daily_series([_habit(1, "weekly")], _done(1, TODAY), 3, today=TODAY)
        assert all(s.total == 0 and s.completed == 0 and s.rate == 0.0 for s in series)

    def test_zero_days_is_empty(self):
        assert daily_series([_habit(1)], [], 0, today=TODAY) == []


class TestWeeklySeries:
    def test_weeks_are_monday_anchored_newest_first(self):
        series = weekly_series([_habit(1)], [], 3, today=TODAY)
        assert [s.day for s in series] == [date(2024, 3, 11), date(2024, 3, 4), date(2024, 2, 26)]

    def test_capacity_is_daily_habits_times_seven(self):
        habits = [_habit(1), _habit(2), _habit(3, "weekly")]
        stat = weekly_series(habits, [], 1, today=TODAY)[0]
        assert stat.total == 14

    def test_numerator_counts_records_of_every_frequency(self):
        habits = [_habit(1), _habit(2, "weekly")]
        completions = (
            _done(1, date(2024, 3, 11), count=2)
            + _done(2, date(2024, 3, 12))
            + _done(1, date(2024, 3, 10))  # previous week (Sunday)
        )
        series = weekly_series(habits, completions, 2, today=TODAY)
        assert (series[0].completed, series[0].total) == (3, 7)
        assert (series[1].completed, series[1].total) == (1, 7)

    def test_habit_created_midweek_counts_for_that_week(self):
        habit = _habit(1, created=date(2024, 3, 17))  # Sunday of the current week
        series = weekly_series([habit], [], 2, today=TODAY)
        assert [s.total for s in series] == [7, 0]

    def test_archived_habit_records_are_excluded(self):
        habits = [_habit(1), _habit(2, archived=True)]
        completions = _done(1, TODAY) + _done(2, TODAY, count=4)
        stat = weekly_series(habits, completions, 1, today=TODAY)[0]
        assert stat.completed == 1


class TestOverviewTotals:
    def test_elapsed_days_is_inclusive(self):
        assert elapsed_days(_habit(1, created=TODAY), today=TODAY) == 1
        assert elapsed_days(_habit(1, created=TODAY - timedelta(days=9)), today=TODAY) == 10

    def test_totals_mix_daily_capacity_with_all_records(self):
        habits = [
            _habit(1, created=TODAY - timedelta(days=4)),
            _habit(2, "weekly", created=TODAY - timedelta(days=30)),
            _habit(3, created=TODAY - timedelta(days=30), archived=True),
        ]
        completions = _done(1, TODAY, count=2) + _done(2, TODAY) + _done(3, TODAY)
        assert overview_totals(habits, completions, today=TODAY) == (3, 5)

    def test_no_habits(self):
        assert overview_totals([], [], today=TODAY) == (0, 0)
