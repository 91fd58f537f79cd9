# src/todo_keeper/core/categories.py

from __future__ import annotations

import logging
from collections.abc import Iterable

from .models import Category

logger = logging.getLogger(__name__)


class CategoryRegistry:
    """
    Id -> Category lookup used by the add path.

    Insertion order is kept so listings and persistence stay stable.
    """

    def __init__(self, categories: Iterable[Category] = ()) -> None:
        self._by_id: dict[str, Category] = {}
        for c in categories:
            self._by_id[c.id] = c

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._by_id

    def get(self, category_id: str) -> Category | None:
        return self._by_id.get(category_id)

    def all(self) -> tuple[Category, ...]:
        return tuple(self._by_id.values())

    def register(self, category: Category) -> None:
        """Add a category, or replace the one with the same id in place."""
        self._by_id[category.id] = category

    def resolve(self, ids: Iterable[str]) -> tuple[Category, ...]:
        """
        Resolve ids in the caller's order.

        Unknown ids are dropped without error: a category picked in a form
        may have been removed by the time the form is submitted.
        """
        out: list[Category] = []
        seen: set[str] = set()
        for cid in ids:
            if cid in seen:
                continue
            seen.add(cid)
            cat = self._by_id.get(cid)
            if cat is None:
                logger.debug("Dropping unknown category id=%s", cid)
                continue
            out.append(cat)
        return tuple(out)
