"""Habit service helpers: validation and lifecycle operations."""

from __future__ import annotations

from ..domain.repositories import CategoryRepository, HabitRepository
from ..errors import CategoryNotFound, HabitNotFound, InvalidHabitConfiguration
from ..logging_config import get_logger
from ..models.habit import FrequencyType, Habit

logger = get_logger("services.habits")

FREQUENCY_CHOICES = [f.value for f in FrequencyType]


def validate_habit(habit: Habit) -> None:
    """Raise ``InvalidHabitConfiguration`` when fields are out of range."""

    if not habit.name or not habit.name.strip():
        raise InvalidHabitConfiguration("Habit name must not be empty")
    if habit.frequency_type not in FREQUENCY_CHOICES:
        raise InvalidHabitConfiguration(f"Unknown frequency type: {habit.frequency_type!r}")
    if habit.frequency_type == FrequencyType.TIMES_PER_WEEK.value and not (
        1 <= habit.frequency_value <= 7
    ):
        raise InvalidHabitConfiguration("Times per week must be between 1 and 7")
    if habit.target_per_day < 1:
        raise InvalidHabitConfiguration("Target per day must be at least 1")


def create_habit(
    habit_repo: HabitRepository,
    *,
    name: str,
    description: str = "",
    emoji: str = "",
    frequency_type: str = FrequencyType.DAILY.value,
    frequency_value: int | None = None,
    target_per_day: int = 1,
    category_id: int | None = None,
    category_repo: CategoryRepository | None = None,
) -> Habit:
    """Validate and persist a new habit, filling frequency defaults."""

    if category_id is not None and category_repo is not None:
        if category_repo.get_by_id(category_id) is None:
            raise CategoryNotFound(category_id)

    habit = Habit(
        name=name.strip(),
        description=description,
        emoji=emoji,
        frequency_type=frequency_type or FrequencyType.DAILY.value,
        frequency_value=frequency_value or 1,
        target_per_day=target_per_day,
        category_id=category_id,
    )
    validate_habit(habit)
    created = habit_repo.create(habit)
    logger.info(
        "Habit created",
        extra={"habit_id": created.id, "frequency_type": created.frequency_type},
    )
    return created


EDITABLE_FIELDS = frozenset(
    {
        "name",
        "description",
        "emoji",
        "frequency_type",
        "frequency_value",
        "target_per_day",
        "category_id",
    }
)


def update_habit(
    habit_repo: HabitRepository,
    habit_id: int,
    *,
    category_repo: CategoryRepository | None = None,
    **changes,
) -> Habit:
    """Apply field changes to an existing habit after validating the result.

    Nothing is written when validation fails.
    """

    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise InvalidHabitConfiguration(f"Cannot change field(s): {', '.join(sorted(unknown))}")

    habit = require_habit(habit_repo, habit_id)

    category_id = changes.get("category_id")
    if category_id is not None and category_repo is not None:
        if category_repo.get_by_id(category_id) is None:
            raise CategoryNotFound(category_id)

    for key, value in changes.items():
        if key == "name" and value is not None:
            value = value.strip()
        setattr(habit, key, value)

    validate_habit(habit)
    updated = habit_repo.update(habit)
    logger.info("Habit updated", extra={"habit_id": habit_id, "fields": sorted(changes)})
    return updated


def require_habit(habit_repo: HabitRepository, habit_id: int) -> Habit:
    """Return the habit or raise ``HabitNotFound``."""

    habit = habit_repo.get_by_id(habit_id)
    if habit is None:
        raise HabitNotFound(habit_id)
    return habit


__all__ = [
    "EDITABLE_FIELDS",
    "FREQUENCY_CHOICES",
    "create_habit",
    "require_habit",
    "update_habit",
    "validate_habit",
]
