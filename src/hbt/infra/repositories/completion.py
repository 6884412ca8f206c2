"""SQLModel implementation of the completion store."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable

from sqlalchemy import func
from sqlmodel import select

from ...models.habit import Completion
from ..database import SessionFactory


class SQLModelCompletionRepository:
    """Append/remove store of per-day habit completions."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def add(self, habit_id: int, completed_on: date, notes: str = "") -> Completion:
        """Record one completion. Same-day records are kept side by side."""
        with self.session_factory() as session:
            completion = Completion(habit_id=habit_id, completed_on=completed_on, notes=notes)
            session.add(completion)
            session.commit()
            session.refresh(completion)
            session.expunge(completion)
            return completion

    def remove_one(self, habit_id: int, completed_on: date) -> bool:
        """Delete the newest completion recorded on a day. Returns False if none existed."""
        with self.session_factory() as session:
            completion = session.exec(
                select(Completion)
                .where(Completion.habit_id == habit_id)
                .where(Completion.completed_on == completed_on)
                .order_by(Completion.id.desc())  # type: ignore[union-attr]
            ).first()
            if completion is None:
                return False
            session.delete(completion)
            session.commit()
            return True

    def remove_all_on(self, habit_id: int, completed_on: date) -> int:
        """Delete every completion of a habit on a day and return how many went."""
        with self.session_factory() as session:
            rows = session.exec(
                select(Completion)
                .where(Completion.habit_id == habit_id)
                .where(Completion.completed_on == completed_on)
            ).all()
            for row in rows:
                session.delete(row)
            session.commit()
            return len(rows)

    def completion_dates_for(self, habit_id: int) -> list[date]:
        """Return every completion date of a habit, oldest first, duplicates kept."""
        with self.session_factory() as session:
            statement = (
                select(Completion.completed_on)
                .where(Completion.habit_id == habit_id)
                .order_by(Completion.completed_on)  # type: ignore[arg-type]
            )
            return list(session.exec(statement).all())

    def count_completions_on(self, habit_id: int, day: date) -> int:
        """Count completion records of a habit on one day."""
        with self.session_factory() as session:
            statement = (
                select(func.count())
                .select_from(Completion)
                .where(Completion.habit_id == habit_id)
                .where(Completion.completed_on == day)
            )
            return int(session.exec(statement).one())

    def count_completions_in_week(self, habit_id: int, week_start: date) -> int:
        """Count completion records in the seven days starting at ``week_start``."""
        with self.session_factory() as session:
            statement = (
                select(func.count())
                .select_from(Completion)
                .where(Completion.habit_id == habit_id)
                .where(Completion.completed_on >= week_start)
                .where(Completion.completed_on < week_start + timedelta(days=7))
            )
            return int(session.exec(statement).one())

    def completions_in_range(self, habit_id: int, start: date, end: date) -> list[Completion]:
        """Completions of one habit between two days (inclusive), newest first."""
        with self.session_factory() as session:
            statement = (
                select(Completion)
                .where(Completion.habit_id == habit_id)
                .where(Completion.completed_on >= start)
                .where(Completion.completed_on <= end)
                .order_by(Completion.completed_on.desc(), Completion.id.desc())  # type: ignore[union-attr]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def completions_for_habits(
        self,
        habit_ids: Iterable[int],
        start: date | None = None,
        end: date | None = None,
    ) -> list[Completion]:
        """Completions across several habits, optionally bounded by day, oldest first."""
        ids = list(habit_ids)
        if not ids:
            return []
        with self.session_factory() as session:
            statement = select(Completion).where(Completion.habit_id.in_(ids))  # type: ignore[union-attr]
            if start is not None:
                statement = statement.where(Completion.completed_on >= start)
            if end is not None:
                statement = statement.where(Completion.completed_on <= end)
            statement = statement.order_by(Completion.completed_on, Completion.id)  # type: ignore[arg-type]
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows
