# src/todo_keeper/core/errors.py

from __future__ import annotations


class TodoKeeperError(Exception):
    """Base class for every error raised by the todo core."""


class ValidationError(TodoKeeperError):
    """Input has the wrong shape (empty title, unknown status, id collision...)."""


class CorruptStateError(TodoKeeperError):
    """
    Persisted state exists but cannot be parsed into the expected structure.

    `path` points at the first offending field, e.g. "todos[3].status".
    """

    def __init__(self, message: str, *, path: str = "$") -> None:
        super().__init__(f"{path}: {message}")
        self.path = path
        self.reason = message


class StorageWriteError(TodoKeeperError):
    """The storage medium refused the write (quota exceeded, disk error)."""
