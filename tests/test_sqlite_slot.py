# tests/test_sqlite_slot.py

from __future__ import annotations

from pathlib import Path

import pytest

from todo_keeper.core.errors import StorageWriteError
from todo_keeper.core.models import Todo
from todo_keeper.storage.persistence import PersistenceAdapter
from todo_keeper.storage.slot import SqliteSlot


def test_get_set_overwrite_and_survive_reopen(tmp_path: Path) -> None:
    db = tmp_path / "nested" / "state.sqlite3"
    slot = SqliteSlot(db)

    assert slot.get("k") is None
    slot.set("k", "v1")
    slot.set("k", "v2")
    assert slot.get("k") == "v2"

    reopened = SqliteSlot(db)
    assert reopened.get("k") == "v2"


def test_quota_rejects_write_and_keeps_previous_value(tmp_path: Path) -> None:
    slot = SqliteSlot(tmp_path / "state.sqlite3", quota_bytes=16)
    slot.set("k", "small")

    with pytest.raises(StorageWriteError):
        slot.set("k", "x" * 17)

    assert slot.get("k") == "small"


def test_quota_counts_utf8_bytes(tmp_path: Path) -> None:
    slot = SqliteSlot(tmp_path / "state.sqlite3", quota_bytes=4)
    slot.set("k", "abcd")
    with pytest.raises(StorageWriteError):
        slot.set("k", "ééé")  # 6 bytes


def test_persistence_adapter_over_sqlite(tmp_path: Path) -> None:
    db = tmp_path / "state.sqlite3"
    PersistenceAdapter(SqliteSlot(db)).save([Todo(id="a", title="Ship it")], [])

    data = PersistenceAdapter(SqliteSlot(db)).load()
    assert [t.title for t in data.todos] == ["Ship it"]


def test_unencodable_value_is_a_write_error(tmp_path: Path) -> None:
    slot = SqliteSlot(tmp_path / "state.sqlite3")
    slot.set("k", "ok")

    with pytest.raises(StorageWriteError):
        slot.set("k", "bad \udcff byte")

    assert slot.get("k") == "ok"
