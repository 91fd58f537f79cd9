# src/todo_keeper/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the storage medium and the front end swappable and makes testing easier.
"""

from typing import Protocol


class StorageSlot(Protocol):
    """
    Durable key-value medium (think browser local storage).

    set() must either store the whole value or raise StorageWriteError;
    a half-written value is never observable through get().
    """

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...


class Notifier(Protocol):
    """
    Front-end side port: how the pipeline reports outcomes (toasts, banners).

    `destructive` marks failures so the front end can style them.
    """

    def notify(self, title: str, description: str, *, destructive: bool = False) -> None: ...
