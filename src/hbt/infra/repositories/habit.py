"""SQLModel implementation of Habit repository."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import select

from ...models.habit import Habit
from ..database import SessionFactory


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID, archived or not."""
        with self.session_factory() as session:
            obj = session.get(Habit, habit_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, include_archived: bool = False) -> list[Habit]:
        """List habits ordered by name, active ones first when archived are included."""
        with self.session_factory() as session:
            statement = select(Habit)
            if include_archived:
                statement = statement.order_by(
                    Habit.archived_at.is_not(None), Habit.name  # type: ignore[union-attr]
                )
            else:
                statement = statement.where(Habit.archived_at == None).order_by(  # noqa: E711
                    Habit.name  # type: ignore[arg-type]
                )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def active_habits(self) -> list[Habit]:
        """List non-archived habits."""
        return self.list_all(include_archived=False)

    def list_by_category(self, category_id: int) -> list[Habit]:
        """List non-archived habits filed under a category."""
        with self.session_factory() as session:
            statement = (
                select(Habit)
                .where(Habit.category_id == category_id)
                .where(Habit.archived_at == None)  # noqa: E711
                .order_by(Habit.name)  # type: ignore[arg-type]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, habit: Habit) -> Habit:
        """Create a new habit."""
        with self.session_factory() as session:
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def update(self, habit: Habit) -> Habit:
        """Update an existing habit."""
        with self.session_factory() as session:
            merged = session.merge(habit)
            session.commit()
            session.refresh(merged)
            session.expunge(merged)
            return merged

    def archive(self, habit_id: int, *, when: datetime | None = None) -> Optional[Habit]:
        """Soft delete: stamp archived_at, keeping completions."""
        with self.session_factory() as session:
            habit = session.get(Habit, habit_id)
            if habit is None:
                return None
            habit.archived_at = when or datetime.now()
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def unarchive(self, habit_id: int) -> Optional[Habit]:
        """Restore an archived habit."""
        with self.session_factory() as session:
            habit = session.get(Habit, habit_id)
            if habit is None:
                return None
            habit.archived_at = None
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def delete(self, habit_id: int) -> bool:
        """Delete a habit and its completions. Returns False when it did not exist."""
        with self.session_factory() as session:
            habit = session.get(Habit, habit_id)
            if habit is None:
                return False
            session.delete(habit)
            session.commit()
            return True
