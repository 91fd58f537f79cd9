# src/todo_keeper/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing downstream reads the environment; settings are passed in.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

from .storage.persistence import DEFAULT_STORAGE_KEY
from .storage.slot import DEFAULT_QUOTA_BYTES

ENV_PREFIX = "TODO_KEEPER"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    db_path: Path

    # ---- Persistence ----
    storage_key: str
    storage_quota_bytes: int
    rollback_on_write_failure: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todo-keeper") or "todo-keeper"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todo-keeper"))
        db_path = _env_path(_k("DB_PATH"), data_dir / "state.sqlite3")

        storage_key = _env(_k("STORAGE_KEY"), DEFAULT_STORAGE_KEY).strip() or DEFAULT_STORAGE_KEY
        storage_quota_bytes = max(1, _env_int(_k("STORAGE_QUOTA_BYTES"), DEFAULT_QUOTA_BYTES))
        rollback_on_write_failure = _env_bool(_k("ROLLBACK_ON_WRITE_FAILURE"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            db_path=db_path,
            storage_key=storage_key,
            storage_quota_bytes=storage_quota_bytes,
            rollback_on_write_failure=rollback_on_write_failure,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # .env is read lazily so importing this module has no side effects.
    load_dotenv(override=False)
    return Settings.from_env()
