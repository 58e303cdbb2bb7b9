# tests/test_kv_store.py

from __future__ import annotations

from pathlib import Path

from taskspin.storage.kv_store import SqliteKeyValueStore, StoreKeys


def test_kv_get_set_overwrite_delete(tmp_path: Path) -> None:
    db = tmp_path / "kv.sqlite3"
    store = SqliteKeyValueStore(db)

    assert store.get("taskspin_tasks") is None

    store.set("taskspin_tasks", "[]")
    assert store.get("taskspin_tasks") == "[]"

    store.set("taskspin_tasks", '[{"id": 1}]')
    assert store.get("taskspin_tasks") == '[{"id": 1}]'
    assert store.keys() == ["taskspin_tasks"]

    store.delete("taskspin_tasks")
    assert store.get("taskspin_tasks") is None
    assert store.keys() == []


def test_kv_survives_reopen(tmp_path: Path) -> None:
    db = tmp_path / "nested" / "kv.sqlite3"
    first = SqliteKeyValueStore(db)
    first.set("taskspin_nextReset", "1781301600000")
    first.set("taskspin_settings", '{"theme": "dark"}')

    second = SqliteKeyValueStore(db)
    assert second.get("taskspin_nextReset") == "1781301600000"
    assert second.get("taskspin_settings") == '{"theme": "dark"}'
    assert second.keys() == ["taskspin_nextReset", "taskspin_settings"]


def test_store_keys_prefix() -> None:
    keys = StoreKeys("taskspin_")
    assert (keys.tasks, keys.settings, keys.next_reset) == (
        "taskspin_tasks",
        "taskspin_settings",
        "taskspin_nextReset",
    )
    assert StoreKeys("other_").tasks == "other_tasks"
