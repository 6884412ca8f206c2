"""Tests for current and best streak calculations.

These cover consecutive days, gaps, streaks anchored on yesterday,
duplicate-day completions from multi-per-day targets, and empty histories.
"""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from hbt.services.streaks import best_streak, compute_streaks, current_streak

TODAY = date(2024, 3, 14)


def _ago(n: int) -> date:
    return TODAY - timedelta(days=n)


class TestCurrentStreak:
    """Consecutive days ending today or yesterday."""

    def test_no_completions_returns_zero(self):
        assert current_streak([], today=TODAY) == 0

    def test_three_days_ending_today(self):
        assert current_streak([_ago(0), _ago(1), _ago(2)], today=TODAY) == 3

    def test_gap_after_today_stops_the_walk(self):
        assert current_streak([_ago(0), _ago(2)], today=TODAY) == 1

    def test_nothing_today_or_yesterday_is_broken(self):
        assert current_streak([_ago(3), _ago(2)], today=TODAY) == 0

    def test_streak_can_end_yesterday(self):
        assert current_streak([_ago(1), _ago(2), _ago(3), _ago(5)], today=TODAY) == 3

    def test_duplicate_days_count_once(self):
        dates = [_ago(0), _ago(0), _ago(1)]
        assert current_streak(dates, today=TODAY) == 2

    def test_duplicates_in_the_middle_do_not_break_the_run(self):
        dates = [_ago(0), _ago(1), _ago(1), _ago(1), _ago(2)]
        assert current_streak(dates, today=TODAY) == 3

    def test_input_order_does_not_matter(self):
        dates = [_ago(2), _ago(0), _ago(1)]
        assert current_streak(dates, today=TODAY) == 3

    def test_future_completion_counts_as_broken(self):
        assert current_streak([TODAY + timedelta(days=1), TODAY], today=TODAY) == 0

    def test_long_run_across_month_boundary(self):
        dates = [_ago(i) for i in range(20)]
        assert current_streak(dates, today=TODAY) == 20


class TestBestStreak:
    """Longest run anywhere in the history."""

    def test_no_completions_returns_zero(self):
        assert best_streak([]) == 0

    def test_single_completion_is_one(self):
        assert best_streak([date(2024, 1, 1)]) == 1

    def test_runs_separated_by_gap(self):
        first = [date(2024, 1, 1) + timedelta(days=i) for i in range(2)]
        # three missing days, then five in a row
        second = [date(2024, 1, 6) + timedelta(days=i) for i in range(5)]
        assert best_streak(first + second) == 5

    def test_earlier_run_can_be_the_best(self):
        first = [date(2024, 1, 1) + timedelta(days=i) for i in range(7)]
        second = [date(2024, 2, 1) + timedelta(days=i) for i in range(3)]
        assert best_streak(second + first) == 7

    def test_duplicates_are_ignored(self):
        dates = [date(2024, 1, 1), date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 2), date(2024, 1, 3)]
        assert best_streak(dates) == 3

    def test_leap_day_is_consecutive(self):
        assert best_streak([date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]) == 3


class TestStreakProperties:
    """Invariants shared by both calculations."""

    @pytest.mark.parametrize(
        "offsets",
        [
            [],
            [0],
            [0, 1, 2],
            [0, 2],
            [1, 2, 3, 10, 11, 12, 13, 14],
            [0, 0, 1, 5, 6, 7, 8],
            [30, 31, 32],
        ],
    )
    def test_current_never_exceeds_best(self, offsets):
        current, best = compute_streaks([_ago(n) for n in offsets], today=TODAY)
        assert current <= best

    def test_repeated_calls_are_identical(self):
        dates = [_ago(n) for n in (0, 1, 1, 3, 4, 5)]
        first = compute_streaks(dates, today=TODAY)
        second = compute_streaks(dates, today=TODAY)
        assert first == second == (2, 3)

    def test_compute_streaks_accepts_a_generator(self):
        current, best = compute_streaks((_ago(n) for n in range(4)), today=TODAY)
        assert (current, best) == (4, 4)
