# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_keeper.cli.bootstrap import create_initial_state
from todo_keeper.core.pipeline import MutationPipeline
from todo_keeper.core.state import AppState
from todo_keeper.core.store import TodoStore
from todo_keeper.storage.persistence import PersistenceAdapter

from .fakes import MemorySlot, RecordingNotifier


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="todo-keeper-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        db_path=tmp_path / "state.sqlite3",
        storage_key="todo-app-data",
        storage_quota_bytes=5 * 1024 * 1024,
        rollback_on_write_failure=True,
    )


@pytest.fixture()
def slot() -> MemorySlot:
    return MemorySlot()


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def persistence(slot: MemorySlot) -> PersistenceAdapter:
    return PersistenceAdapter(slot)


@pytest.fixture()
def store() -> TodoStore:
    return TodoStore()


@pytest.fixture()
def pipeline(
    store: TodoStore, persistence: PersistenceAdapter, notifier: RecordingNotifier
) -> MutationPipeline:
    return MutationPipeline(store, persistence, notifier=notifier)


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """
    AppState wired through the real bootstrap.

    NOTE: We keep the real SQLite slot here because the full path
    (command -> pipeline -> slot) is part of what we want to test.
    """
    return create_initial_state(settings=settings)
