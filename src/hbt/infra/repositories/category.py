"""SQLModel implementation of Category repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import select

from ...models.category import DEFAULT_COLOR, Category
from ..database import SessionFactory


class SQLModelCategoryRepository:
    """SQLModel-based category repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, category_id: int) -> Optional[Category]:
        """Retrieve a category by ID."""
        with self.session_factory() as session:
            obj = session.get(Category, category_id)
            if obj:
                session.expunge(obj)
            return obj

    def get_many(self, category_ids: set[int]) -> dict[int, Category]:
        """Look up several categories at once, keyed by id."""
        if not category_ids:
            return {}
        with self.session_factory() as session:
            rows = list(
                session.exec(
                    select(Category).where(Category.id.in_(category_ids))  # type: ignore[union-attr]
                ).all()
            )
            session.expunge_all()
            return {row.id: row for row in rows if row.id is not None}

    def list_all(self) -> list[Category]:
        """List all categories."""
        with self.session_factory() as session:
            statement = select(Category).order_by(Category.name)  # type: ignore[arg-type]
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, category: Category) -> Category:
        """Create a new category."""
        with self.session_factory() as session:
            if not category.color:
                category.color = DEFAULT_COLOR
            session.add(category)
            session.commit()
            session.refresh(category)
            session.expunge(category)
            return category

    def update(self, category: Category) -> Category:
        """Update an existing category."""
        with self.session_factory() as session:
            merged = session.merge(category)
            session.commit()
            session.refresh(merged)
            session.expunge(merged)
            return merged

    def delete(self, category_id: int) -> bool:
        """Delete a category by ID; its habits become uncategorized."""
        with self.session_factory() as session:
            category = session.get(Category, category_id)
            if category is None:
                return False
            session.delete(category)
            session.commit()
            return True
