# tests/test_config.py

from __future__ import annotations

from pathlib import Path

from taskspin.config import Settings
from taskspin.core.clock import resolve_timezone


def test_defaults(monkeypatch) -> None:
    for name in (
        "TASKSPIN_APP_NAME",
        "TASKSPIN_DATA_DIR",
        "TASKSPIN_STORE_PATH",
        "TASKSPIN_TICK_SECONDS",
        "TASKSPIN_TIMEZONE",
        "TASKSPIN_RANDOM_SEED",
        "TASKSPIN_KEY_PREFIX",
    ):
        monkeypatch.delenv(name, raising=False)

    s = Settings.from_env()
    assert s.app_name == "taskspin"
    assert s.data_dir == Path(".local/taskspin")
    assert s.store_path == Path(".local/taskspin") / "taskspin.sqlite3"
    assert s.key_prefix == "taskspin_"
    assert s.tick_seconds == 1.0
    assert s.timezone is None
    assert s.random_seed is None


def test_env_overrides(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKSPIN_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("TASKSPIN_STORE_PATH", raising=False)
    monkeypatch.setenv("TASKSPIN_TICK_SECONDS", "0.1")
    monkeypatch.setenv("TASKSPIN_TIMEZONE", "Asia/Tokyo")
    monkeypatch.setenv("TASKSPIN_RANDOM_SEED", "not-a-number")

    s = Settings.from_env()
    assert s.store_path == tmp_path / "taskspin.sqlite3"
    assert s.tick_seconds == 0.5
    assert s.timezone == "Asia/Tokyo"
    assert s.random_seed is None


def test_resolve_timezone() -> None:
    assert resolve_timezone(None) is None
    assert resolve_timezone("") is None
    assert resolve_timezone("Not/AZone") is None
    tz = resolve_timezone("Asia/Tokyo")
    assert tz is not None and str(tz) == "Asia/Tokyo"
