# src/todo_keeper/core/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from .errors import ValidationError


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, raw: str | Priority | None) -> Priority:
        """Empty input means the default (medium); anything unknown is rejected."""
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            return cls.MEDIUM
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            raise ValidationError(f"Unknown priority: {raw!r}") from None


class TodoStatus(StrEnum):
    """
    Todo lifecycle status.

    Any status may move to any other; the only guarantee is that no value
    outside these three is ever stored.
    """

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, raw: str | TodoStatus) -> TodoStatus:
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            raise ValidationError(f"Unknown status: {raw!r}") from None


@dataclass(frozen=True, slots=True)
class Category:
    id: str
    name: str
    color: str

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "name": self.name, "color": self.color}


@dataclass(frozen=True, slots=True)
class Todo:
    """
    A single trackable task.

    `categories` holds copies of the registry entries taken when the todo was
    created, so renaming or recoloring a category later leaves the todo as is.
    `due_date` is an ISO-8601 string, or "" when the todo has no due date.
    """

    id: str
    title: str
    description: str = ""
    due_date: str = ""
    priority: Priority = Priority.MEDIUM
    status: TodoStatus = TodoStatus.PENDING
    categories: tuple[Category, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "due_date": self.due_date,
            "priority": self.priority.value,
            "status": self.status.value,
            "categories": [c.to_dict() for c in self.categories],
        }


@dataclass(frozen=True, slots=True)
class AppData:
    """The full persisted state: todos (most recent first) and known categories."""

    todos: tuple[Todo, ...] = ()
    categories: tuple[Category, ...] = ()

    @classmethod
    def empty(cls) -> AppData:
        return cls()

    def to_dict(self) -> dict[str, Any]:
        return {
            "todos": [t.to_dict() for t in self.todos],
            "categories": [c.to_dict() for c in self.categories],
        }


@dataclass(frozen=True, slots=True)
class TodoInput:
    """Raw add-form fields as a front end collects them."""

    title: str
    description: str = ""
    due_date: Any = ""
    priority: str | Priority | None = None
    category_ids: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_mapping(cls, raw: dict[str, Any]) -> TodoInput:
        ids = raw.get("category_ids", raw.get("selected_categories")) or ()
        if isinstance(ids, str):
            ids = (ids,)
        elif not isinstance(ids, (list, tuple, set, frozenset)):
            raise ValidationError(f"Category ids must be a list, got {type(ids).__name__}")
        return cls(
            title=str(raw.get("title") or ""),
            description=str(raw.get("description") or ""),
            due_date=raw.get("due_date") or "",
            priority=raw.get("priority"),
            category_ids=tuple(str(i) for i in ids),
        )
