"""Habit tracking data structures."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import ClassVar, Optional

from sqlalchemy import DateTime
from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel


class FrequencyType(str, Enum):
    """How often a habit is expected to be done."""

    DAILY = "daily"
    WEEKLY = "weekly"
    TIMES_PER_WEEK = "times_per_week"


class Habit(SQLModel, table=True):
    """A user-defined recurring activity with a frequency policy."""

    __tablename__: ClassVar[str] = "habit"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=80, index=True)
    description: str = Field(default="", max_length=255)
    emoji: str = Field(default="", max_length=16)
    category_id: Optional[int] = Field(
        default=None, foreign_key="category.id", ondelete="SET NULL", index=True
    )
    frequency_type: str = Field(default=FrequencyType.DAILY.value, max_length=32)
    # Times per week; only read for times_per_week habits.
    frequency_value: int = Field(default=1, nullable=False)
    target_per_day: int = Field(default=1, nullable=False)
    # Naive local timestamps; created_on takes the local calendar day
    created_at: datetime = Field(
        default_factory=datetime.now, nullable=False, sa_type=DateTime(timezone=False)
    )
    archived_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=False))

    completions: list["Completion"] = Relationship(
        back_populates="habit",
        sa_relationship=relationship(
            "Completion", back_populates="habit", cascade="all, delete-orphan"
        ),
    )

    @property
    def is_archived(self) -> bool:
        return self.archived_at is not None

    @property
    def created_on(self) -> date:
        """Local calendar day the habit was created."""
        return self.created_at.date()


class Completion(SQLModel, table=True):
    """One record of a habit being done on a calendar day."""

    __tablename__: ClassVar[str] = "completion"

    id: Optional[int] = Field(default=None, primary_key=True)
    habit_id: int = Field(foreign_key="habit.id", ondelete="CASCADE", nullable=False, index=True)
    completed_on: date = Field(nullable=False, index=True)
    notes: str = Field(default="", max_length=500)

    habit: Optional[Habit] = Relationship(
        back_populates="completions",
        sa_relationship=relationship("Habit", back_populates="completions"),
    )
