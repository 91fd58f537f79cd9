# tests/test_todo_store.py

from __future__ import annotations

import pytest

from todo_keeper.core.errors import ValidationError
from todo_keeper.core.models import Category, Priority, Todo, TodoStatus
from todo_keeper.core.store import TodoStore


def _todo(todo_id: str, title: str = "t", **kw) -> Todo:
    return Todo(id=todo_id, title=title, **kw)


def test_add_inserts_at_head_and_keeps_prior_order(store: TodoStore) -> None:
    store.add(_todo("a"))
    store.add(_todo("b"))
    store.add(_todo("c"))

    assert [t.id for t in store.snapshot()] == ["c", "b", "a"]


def test_add_rejects_empty_title_and_duplicate_id(store: TodoStore) -> None:
    with pytest.raises(ValidationError):
        store.add(_todo("a", title="   "))

    store.add(_todo("a"))
    with pytest.raises(ValidationError):
        store.add(_todo("a", title="other"))

    assert len(store.snapshot()) == 1


def test_update_status_replaces_only_status(store: TodoStore) -> None:
    cat = Category(id="c1", name="Work", color="#f00")
    original = _todo(
        "a",
        title="Write report",
        description="d",
        due_date="2026-10-20T00:00:00",
        priority=Priority.HIGH,
        categories=(cat,),
    )
    store.add(original)

    assert store.update_status("a", TodoStatus.COMPLETED) is True

    updated = store.get("a")
    assert updated is not None
    assert updated.status is TodoStatus.COMPLETED
    assert updated.title == original.title
    assert updated.description == original.description
    assert updated.due_date == original.due_date
    assert updated.priority is Priority.HIGH
    assert updated.categories == (cat,)


def test_update_status_is_idempotent(store: TodoStore) -> None:
    store.add(_todo("a"))
    store.add(_todo("b"))

    store.update_status("a", TodoStatus.IN_PROGRESS)
    once = store.snapshot()
    store.update_status("a", TodoStatus.IN_PROGRESS)

    assert store.snapshot() == once


def test_update_status_missing_id_is_noop(store: TodoStore) -> None:
    store.add(_todo("a"))
    before = store.snapshot()

    assert store.update_status("nonexistent", TodoStatus.COMPLETED) is False
    assert store.snapshot() == before


def test_snapshot_is_detached_from_store(store: TodoStore) -> None:
    store.add(_todo("a"))
    snap = store.snapshot()
    store.add(_todo("b"))

    assert isinstance(snap, tuple)
    assert [t.id for t in snap] == ["a"]


def test_initialize_replaces_everything(store: TodoStore) -> None:
    store.add(_todo("old"))
    cat = Category(id="c1", name="Home", color="blue")

    store.initialize([_todo("x"), _todo("y")], [cat])

    assert [t.id for t in store.snapshot()] == ["x", "y"]
    assert store.categories.all() == (cat,)
    # ids from the restored data count for collision checks
    with pytest.raises(ValidationError):
        store.add(_todo("y"))
    store.add(_todo("old"))
    assert store.snapshot()[0].id == "old"


def test_to_data_carries_todos_and_categories(store: TodoStore) -> None:
    cat = Category(id="c1", name="Home", color="blue")
    store.initialize([_todo("x")], [cat])

    data = store.to_data()
    assert data.todos == store.snapshot()
    assert data.categories == (cat,)
