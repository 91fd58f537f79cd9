# src/todo_keeper/__init__.py
"""Local todo tracking: in-memory store with write-through persistence."""

__version__ = "0.1.0"
