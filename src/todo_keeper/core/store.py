# src/todo_keeper/core/store.py

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace

from .categories import CategoryRegistry
from .errors import ValidationError
from .models import AppData, Category, Todo, TodoStatus

logger = logging.getLogger(__name__)


class TodoStore:
    """
    In-memory todo collection (most recent first) plus the category registry.

    Pure state holder:
    - no I/O; persistence is the pipeline's job
    - todos are frozen dataclasses, updates swap in a replaced copy
    - snapshot() hands out tuples, so readers cannot mutate the store
    """

    def __init__(self) -> None:
        self._todos: list[Todo] = []
        self._ids: set[str] = set()
        self._categories = CategoryRegistry()

    @property
    def categories(self) -> CategoryRegistry:
        return self._categories

    def initialize(self, todos: Iterable[Todo], categories: Iterable[Category]) -> None:
        """Replace the whole state. Restored data is trusted as-is."""
        self._todos = list(todos)
        self._ids = {t.id for t in self._todos}
        self._categories = CategoryRegistry(categories)
        logger.debug(
            "TodoStore initialized todos=%d categories=%d",
            len(self._todos),
            len(self._categories),
        )

    def add(self, todo: Todo) -> None:
        if not todo.title or not todo.title.strip():
            raise ValidationError("Title is required.")
        if todo.id in self._ids:
            raise ValidationError(f"Todo id already exists: {todo.id}")

        self._todos.insert(0, todo)
        self._ids.add(todo.id)
        logger.debug("Todo added id=%s priority=%s", todo.id, todo.priority.value)

    def update_status(self, todo_id: str, status: TodoStatus) -> bool:
        """
        Set the status of the todo with `todo_id`.

        A missing id is a no-op, not an error: the caller may hold a stale
        view of a list that has since been reloaded. Returns True if a todo
        matched.
        """
        for i, todo in enumerate(self._todos):
            if todo.id == todo_id:
                self._todos[i] = replace(todo, status=status)
                logger.debug("Todo status id=%s %s -> %s", todo_id, todo.status.value, status.value)
                return True

        logger.debug("update_status: no todo id=%s (no-op)", todo_id)
        return False

    def get(self, todo_id: str) -> Todo | None:
        for todo in self._todos:
            if todo.id == todo_id:
                return todo
        return None

    def snapshot(self) -> tuple[Todo, ...]:
        return tuple(self._todos)

    def to_data(self) -> AppData:
        return AppData(todos=self.snapshot(), categories=self._categories.all())
