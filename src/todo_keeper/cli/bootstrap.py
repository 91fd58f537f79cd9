# src/todo_keeper/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the storage slot, persistence adapter, store and pipeline into AppState,
- restores saved state (corrupt data -> empty state + warning).
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import Notifier, StorageSlot
from ..core.pipeline import MutationPipeline
from ..core.state import AppState
from ..core.store import TodoStore
from ..storage.persistence import PersistenceAdapter
from ..storage.slot import SqliteSlot

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(
    *,
    settings=None,
    slot: StorageSlot | None = None,
    notifier: Notifier | None = None,
) -> AppState:
    """
    Create AppState from the provided settings and restore saved todos.

    Keeping settings and the slot injectable makes the app easier to test and
    avoids hidden global config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if slot is None:
        _ensure_local_dirs(settings)
        slot = SqliteSlot(settings.db_path, quota_bytes=settings.storage_quota_bytes)

    persistence = PersistenceAdapter(slot, key=settings.storage_key)
    data, warning = persistence.load_or_empty()

    store = TodoStore()
    store.initialize(data.todos, data.categories)

    pipeline = MutationPipeline(
        store,
        persistence,
        notifier=notifier,
        rollback_on_write_failure=bool(getattr(settings, "rollback_on_write_failure", True)),
    )
    logger.info(
        "State ready todos=%d categories=%d",
        len(data.todos),
        len(data.categories),
    )
    return AppState(
        settings=settings,
        store=store,
        persistence=persistence,
        pipeline=pipeline,
        load_warning=warning,
    )
