"""Frequency policy: when does a habit need attention."""

from __future__ import annotations

from datetime import date, timedelta

from ..models.habit import FrequencyType, Habit


def week_start(day: date) -> date:
    """Return the Monday of the calendar week containing ``day``."""

    return day - timedelta(days=day.weekday())


def week_bounds(day: date) -> tuple[date, date]:
    """Return (monday, sunday) for the week containing ``day``."""

    start = week_start(day)
    return start, start + timedelta(days=6)


def is_due(frequency_type: str | None, frequency_value: int, completions_this_period: int) -> bool:
    """Decide whether a habit needs action in the current period.

    ``completions_this_period`` is the number of completions already recorded
    in the current Monday-start week. Daily habits are always due: due-ness says
    attention is expected, not that it is still outstanding. Unknown frequency
    types are due so a misconfigured habit never disappears from view.
    """

    if frequency_type == FrequencyType.DAILY.value:
        return True
    if frequency_type == FrequencyType.WEEKLY.value:
        return completions_this_period == 0
    if frequency_type == FrequencyType.TIMES_PER_WEEK.value:
        return completions_this_period < frequency_value
    return True


def habit_is_due(habit: Habit, completions_this_week: int) -> bool:
    """Apply ``is_due`` to a habit's stored frequency settings."""

    return is_due(habit.frequency_type, habit.frequency_value, completions_this_week)


def describe_frequency(habit: Habit) -> str:
    """Short human label such as ``daily`` or ``3x/week``."""

    if habit.frequency_type == FrequencyType.WEEKLY.value:
        return "weekly"
    if habit.frequency_type == FrequencyType.TIMES_PER_WEEK.value:
        return f"{habit.frequency_value}x/week"
    return "daily"


__all__ = ["describe_frequency", "habit_is_due", "is_due", "week_bounds", "week_start"]
