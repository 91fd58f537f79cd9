# src/todo_keeper/storage/persistence.py

"""
Persistence adapter: the whole app state as one JSON document under one key.

Layout:
    {"todos": [{id, title, description, due_date, priority, status,
                categories: [{id, name, color}]}],
     "categories": [{id, name, color}]}

Restored data goes through explicit shape checks (parse_state), so a damaged
document fails with CorruptStateError naming the offending field instead of
surfacing later as a KeyError somewhere in the front end.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any

from ..core.errors import CorruptStateError
from ..core.models import AppData, Category, Priority, Todo, TodoStatus
from ..core.ports import StorageSlot

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "todo-app-data"


def _require_str(obj: dict[str, Any], key: str, path: str, *, default: str | None = None) -> str:
    val = obj.get(key)
    if val is None:
        if default is None:
            raise CorruptStateError(f"missing required field {key!r}", path=path)
        return default
    if not isinstance(val, str):
        raise CorruptStateError(f"{key!r} must be a string, got {type(val).__name__}", path=f"{path}.{key}")
    return val


def _require_list(obj: dict[str, Any], key: str, path: str) -> list[Any]:
    val = obj.get(key)
    if val is None:
        return []
    if not isinstance(val, list):
        raise CorruptStateError(f"{key!r} must be a list", path=f"{path}.{key}")
    return val


def _parse_category(raw: Any, path: str) -> Category:
    if not isinstance(raw, dict):
        raise CorruptStateError("category must be an object", path=path)
    return Category(
        id=_require_str(raw, "id", path),
        name=_require_str(raw, "name", path),
        color=_require_str(raw, "color", path, default=""),
    )


def _parse_todo(raw: Any, path: str) -> Todo:
    if not isinstance(raw, dict):
        raise CorruptStateError("todo must be an object", path=path)

    priority_raw = _require_str(raw, "priority", path, default=Priority.MEDIUM.value)
    try:
        priority = Priority(priority_raw)
    except ValueError:
        raise CorruptStateError(f"unknown priority {priority_raw!r}", path=f"{path}.priority") from None

    status_raw = _require_str(raw, "status", path, default=TodoStatus.PENDING.value)
    try:
        status = TodoStatus(status_raw)
    except ValueError:
        raise CorruptStateError(f"unknown status {status_raw!r}", path=f"{path}.status") from None

    cats = _require_list(raw, "categories", path)
    return Todo(
        id=_require_str(raw, "id", path),
        title=_require_str(raw, "title", path),
        description=_require_str(raw, "description", path, default=""),
        due_date=_require_str(raw, "due_date", path, default=""),
        priority=priority,
        status=status,
        categories=tuple(
            _parse_category(c, f"{path}.categories[{i}]") for i, c in enumerate(cats)
        ),
    )


def parse_state(raw: str) -> AppData:
    """Parse a stored JSON document into AppData or raise CorruptStateError."""
    try:
        doc = json.loads(raw)
    except (ValueError, TypeError, RecursionError) as e:
        raise CorruptStateError(f"not valid JSON ({e})") from e

    if not isinstance(doc, dict):
        raise CorruptStateError("top level must be an object")

    todos = tuple(
        _parse_todo(t, f"todos[{i}]") for i, t in enumerate(_require_list(doc, "todos", "$"))
    )
    seen: set[str] = set()
    for i, todo in enumerate(todos):
        if todo.id in seen:
            raise CorruptStateError(f"duplicate todo id {todo.id!r}", path=f"todos[{i}].id")
        seen.add(todo.id)

    categories = tuple(
        _parse_category(c, f"categories[{i}]")
        for i, c in enumerate(_require_list(doc, "categories", "$"))
    )
    return AppData(todos=todos, categories=categories)


def dump_state(data: AppData) -> str:
    return json.dumps(data.to_dict(), ensure_ascii=False, separators=(",", ":"))


class PersistenceAdapter:
    """Reads and writes the full state through a StorageSlot under a fixed key."""

    def __init__(self, slot: StorageSlot, *, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._slot = slot
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> AppData:
        """
        Absent value -> empty state (first run, not an error).
        Malformed value -> CorruptStateError.
        """
        raw = self._slot.get(self._key)
        if raw is None:
            logger.info("No saved state under key=%s, starting empty.", self._key)
            return AppData.empty()

        data = parse_state(raw)
        logger.info(
            "Loaded state key=%s todos=%d categories=%d",
            self._key,
            len(data.todos),
            len(data.categories),
        )
        return data

    def load_or_empty(self) -> tuple[AppData, str | None]:
        """
        Boundary policy for startup: a corrupt document is not fatal.

        Returns (state, warning). The stored value is left untouched; the next
        successful save overwrites it.
        """
        try:
            return self.load(), None
        except CorruptStateError as e:
            logger.warning("Saved state is corrupt (%s); starting with empty state.", e)
            return AppData.empty(), f"Saved data could not be read ({e}). Starting fresh."

    def save(self, todos: Iterable[Todo], categories: Iterable[Category]) -> None:
        """Overwrite the stored state. Raises StorageWriteError if the slot refuses."""
        data = AppData(todos=tuple(todos), categories=tuple(categories))
        self._slot.set(self._key, dump_state(data))
        logger.debug("Saved state key=%s todos=%d", self._key, len(data.todos))
