# src/todo_keeper/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..storage.persistence import PersistenceAdapter
from .pipeline import MutationPipeline
from .store import TodoStore


@dataclass
class AppState:
    """
    Everything a front end needs, owned explicitly and passed around.

    Tests build as many independent AppState values as they like.
    """

    # Settings object (config.Settings or a SimpleNamespace in tests).
    settings: Any

    store: TodoStore
    persistence: PersistenceAdapter
    pipeline: MutationPipeline

    # Set when saved data was unreadable at startup.
    load_warning: str | None = None
