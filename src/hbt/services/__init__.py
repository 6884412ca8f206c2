"""Service module exports."""

from . import aggregates, charts, frequency, habits, stats, streaks

__all__ = [
    "aggregates",
    "charts",
    "frequency",
    "habits",
    "stats",
    "streaks",
]
