# src/todo_keeper/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path


class _OwnRecordsFilter(logging.Filter):
    """Console shows todo_keeper records; everything else only from ERROR up."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "todo_keeper" or record.name.startswith("todo_keeper."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/todo-keeper",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Route logs to stderr (quiet, so the prompt stays readable) and to
    `<log_dir>/todo-keeper.log` (everything down to `file_level`).

    Replaces any handlers already on the root logger. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "todo-keeper.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_OwnRecordsFilter())
    root.addHandler(console)

    # backslashreplace: titles typed on a misconfigured terminal may carry lone surrogates
    file_handler = logging.FileHandler(str(log_file), encoding="utf-8", errors="backslashreplace")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    return log_file
