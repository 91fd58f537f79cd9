# src/todo_keeper/core/pipeline.py

from __future__ import annotations

"""
Mutation pipeline.

The single entry point front ends use to change state. Every mutation:
- validates and builds the new value,
- applies it to the TodoStore,
- writes the full state through to storage,
- reports the outcome to an optional Notifier.

Store update + write are one unit: if the write fails, the store is restored
to its pre-mutation snapshot (unless rollback_on_write_failure is off, which
keeps the change in memory and only reports the error).
"""

import logging
import uuid
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from ..storage.persistence import PersistenceAdapter
from .errors import StorageWriteError, TodoKeeperError, ValidationError
from .models import AppData, Category, Priority, Todo, TodoInput, TodoStatus
from .ports import Notifier
from .store import TodoStore

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]


@dataclass(frozen=True, slots=True)
class MutationResult:
    ok: bool
    todo: Todo | None = None
    category: Category | None = None
    error: str | None = None
    error_kind: type[TodoKeeperError] | None = None

    @classmethod
    def failure(cls, exc: TodoKeeperError) -> MutationResult:
        return cls(ok=False, error=str(exc), error_kind=type(exc))


def _new_id() -> str:
    return str(uuid.uuid4())


def normalize_due_date(raw: Any) -> str:
    """
    Coerce a due date to an ISO-8601 string ("" for none).

    Accepts datetime/date objects and ISO strings (date-only or full
    timestamp, a trailing "Z" included). Date-only input, object or string,
    becomes a midnight timestamp so equal dates are stored alike.
    """
    if raw is None or raw == "":
        return ""
    if isinstance(raw, datetime):
        return raw.isoformat()
    if isinstance(raw, date):
        return datetime(raw.year, raw.month, raw.day).isoformat()
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return ""
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            raise ValidationError(f"Invalid due date: {raw!r}") from None
        if "T" not in text and " " not in text:
            # date-only input is stored like a date object: midnight timestamp
            return parsed.isoformat()
        return text
    raise ValidationError(f"Invalid due date: {raw!r}")


class MutationPipeline:
    def __init__(
        self,
        store: TodoStore,
        persistence: PersistenceAdapter,
        *,
        notifier: Notifier | None = None,
        rollback_on_write_failure: bool = True,
        id_factory: IdFactory = _new_id,
    ) -> None:
        self._store = store
        self._persistence = persistence
        self._notifier = notifier
        self._rollback = rollback_on_write_failure
        self._id_factory = id_factory

    @property
    def store(self) -> TodoStore:
        return self._store

    # ---- internals ----

    def _notify(self, title: str, description: str, *, destructive: bool = False) -> None:
        if self._notifier is None:
            return
        try:
            self._notifier.notify(title, description, destructive=destructive)
        except Exception:
            logger.exception("Notifier failed title=%s", title)

    def _fresh_id(self) -> str:
        # uuid4 collisions do not happen in practice; the loop keeps I1 unconditional.
        for _ in range(8):
            candidate = self._id_factory()
            if self._store.get(candidate) is None:
                return candidate
        raise ValidationError("Could not generate a unique todo id.")

    def _commit(self, before: AppData) -> None:
        """Write the current store state through; undo the mutation if that fails."""
        try:
            data = self._store.to_data()
            self._persistence.save(data.todos, data.categories)
        except StorageWriteError:
            if self._rollback:
                self._store.initialize(before.todos, before.categories)
                logger.warning("Storage write failed; in-memory change rolled back.")
            else:
                logger.warning("Storage write failed; in-memory change kept (not persisted).")
            raise

    def _build_todo(self, raw: TodoInput) -> Todo:
        title = (raw.title or "").strip()
        if not title:
            raise ValidationError("Title is required.")
        return Todo(
            id=self._fresh_id(),
            title=title,
            description=raw.description or "",
            due_date=normalize_due_date(raw.due_date),
            priority=Priority.parse(raw.priority),
            status=TodoStatus.PENDING,
            categories=self._store.categories.resolve(raw.category_ids),
        )

    # ---- public API ----

    def submit_add(self, raw: TodoInput | Mapping[str, Any]) -> MutationResult:
        before = self._store.to_data()
        try:
            if not isinstance(raw, TodoInput):
                raw = TodoInput.from_mapping(dict(raw))
            todo = self._build_todo(raw)
            self._store.add(todo)
            self._commit(before)
        except TodoKeeperError as e:
            logger.info("Add failed: %s", e)
            self._notify("Error adding todo", str(e), destructive=True)
            return MutationResult.failure(e)

        logger.info("Todo added id=%s title=%r", todo.id, todo.title)
        self._notify("Todo added", "Your todo has been added successfully.")
        return MutationResult(ok=True, todo=todo)

    def submit_status_change(self, todo_id: str, status: str | TodoStatus) -> MutationResult:
        before = self._store.to_data()
        try:
            new_status = TodoStatus.parse(status)
            self._store.update_status(todo_id, new_status)
            self._commit(before)
        except TodoKeeperError as e:
            logger.info("Status change failed id=%s: %s", todo_id, e)
            self._notify("Error updating todo", str(e), destructive=True)
            return MutationResult.failure(e)

        return MutationResult(ok=True, todo=self._store.get(todo_id))

    def toggle_completed(self, todo_id: str) -> MutationResult:
        """Checkbox behaviour: completed -> pending, anything else -> completed."""
        todo = self._store.get(todo_id)
        if todo is None:
            logger.debug("toggle_completed: no todo id=%s (no-op)", todo_id)
            return MutationResult(ok=True)
        target = TodoStatus.PENDING if todo.status is TodoStatus.COMPLETED else TodoStatus.COMPLETED
        return self.submit_status_change(todo_id, target)

    def add_category(self, name: str, color: str) -> MutationResult:
        before = self._store.to_data()
        try:
            name = (name or "").strip()
            color = (color or "").strip()
            if not name:
                raise ValidationError("Category name is required.")
            if not color:
                raise ValidationError("Category color is required.")
            category = Category(id=self._id_factory(), name=name, color=color)
            if category.id in self._store.categories:
                raise ValidationError(f"Category id already exists: {category.id}")
            self._store.categories.register(category)
            self._commit(before)
        except TodoKeeperError as e:
            logger.info("Add category failed: %s", e)
            self._notify("Error adding category", str(e), destructive=True)
            return MutationResult.failure(e)

        logger.info("Category added id=%s name=%r", category.id, category.name)
        return MutationResult(ok=True, category=category)
