"""Habit category definitions."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

DEFAULT_COLOR = "#CCCCCC"


class Category(SQLModel, table=True):
    """Group of related habits, shown alongside them in listings."""

    __tablename__: ClassVar[str] = "category"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, nullable=False, max_length=64)
    color: str = Field(default=DEFAULT_COLOR, max_length=7)
    emoji: str = Field(default="", max_length=16)
    created_at: datetime = Field(
        default_factory=datetime.now, nullable=False, sa_type=DateTime(timezone=False)
    )
