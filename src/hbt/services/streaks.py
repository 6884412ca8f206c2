"""Streak calculations over a habit's completion dates.

A streak is a run of consecutive calendar days holding at least one
completion. Days are local calendar dates; several completions on the same
day (habits with a target above one per day) count as a single day.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable

_ONE_DAY = timedelta(days=1)


def current_streak(dates: Iterable[date], *, today: date | None = None) -> int:
    """Return the run of consecutive days ending today or yesterday.

    The streak is broken (0) when the most recent completion is neither today
    nor yesterday. Otherwise the walk starts at the most recent day and stops at
    the first missing day.
    """

    today = today or date.today()
    newest_first = sorted(dates, reverse=True)
    if not newest_first:
        return 0

    most_recent = newest_first[0]
    if most_recent != today and most_recent != today - _ONE_DAY:
        return 0

    streak = 0
    expected = most_recent
    for day in newest_first:
        if day == expected:
            streak += 1
            expected -= _ONE_DAY
        elif day < expected:
            break
        # day > expected: repeat of a day already counted

    return streak


def best_streak(dates: Iterable[date]) -> int:
    """Return the longest run of consecutive days anywhere in the history."""

    best = 0
    run = 0
    previous: date | None = None
    for day in sorted(dates):
        if previous is None:
            run = 1
        else:
            gap = (day - previous).days
            if gap == 1:
                run += 1
            elif gap > 1:
                best = max(best, run)
                run = 1
        previous = day

    return max(best, run)


def compute_streaks(dates: Iterable[date], *, today: date | None = None) -> tuple[int, int]:
    """Return (current_streak, best_streak) from a collection of dates."""

    days = list(dates)
    return current_streak(days, today=today), best_streak(days)


__all__ = ["best_streak", "compute_streaks", "current_streak"]
