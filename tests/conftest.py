# tests/conftest.py

from __future__ import annotations

import random
from datetime import datetime
from pathlib import Path
from types import SimpleNamespace
from zoneinfo import ZoneInfo

import pytest

from taskspin.cli.bootstrap import create_initial_state
from taskspin.core.state import AppState

from .fakes import FakeClock, FakeKeyValueStore, FakeSleep

TZ = ZoneInfo("Europe/Berlin")


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskspin-test",
        data_dir=tmp_path,
        store_path=tmp_path / "taskspin.sqlite3",
        key_prefix="taskspin_",
        tick_seconds=1.0,
        timezone="Europe/Berlin",
        random_seed=7,
    )


@pytest.fixture()
def clock() -> FakeClock:
    # A Saturday afternoon, far from any DST transition.
    return FakeClock(datetime(2026, 6, 13, 15, 30, 0, tzinfo=TZ))


@pytest.fixture()
def store() -> FakeKeyValueStore:
    return FakeKeyValueStore()


@pytest.fixture()
def sleep(clock: FakeClock) -> FakeSleep:
    return FakeSleep(clock=clock)


@pytest.fixture()
def state(settings, store, clock, sleep) -> AppState:
    """AppState wired with deterministic fakes (in-memory store, fake clock, fake sleep)."""
    return create_initial_state(
        settings=settings,
        store=store,
        clock=clock,
        rng=random.Random(7),
        sleep=sleep,
    )
