"""Category repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.category import Category


class CategoryRepository(Protocol):
    """Repository for managing category entities."""

    def get_by_id(self, category_id: int) -> Optional[Category]:
        """Retrieve a category by ID."""
        ...

    def get_many(self, category_ids: set[int]) -> dict[int, Category]:
        """Retrieve several categories keyed by ID."""
        ...

    def list_all(self) -> list[Category]:
        """List all categories."""
        ...
