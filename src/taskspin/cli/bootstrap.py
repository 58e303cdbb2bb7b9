# src/taskspin/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations into AppState (store/clock/scheduler/wheel),
- restores persisted tasks, preferences and the next reset instant.
"""

from __future__ import annotations

import asyncio
import logging
import random

from ..config import get_settings
from ..core.clock import SystemClock, resolve_timezone
from ..core.events import EventBus
from ..core.ports import Clock, KeyValueStore, SleepFn
from ..core.state import AppState
from ..prefs.settings_model import SettingsModel
from ..storage.kv_store import SqliteKeyValueStore, StoreKeys
from ..tasks.reset_scheduler import ResetScheduler
from ..tasks.task_registry import TaskRegistry
from ..tasks.wheel import WheelSelector

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.store_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(
    *,
    settings=None,
    store: KeyValueStore | None = None,
    clock: Clock | None = None,
    rng: random.Random | None = None,
    sleep: SleepFn = asyncio.sleep,
) -> AppState:
    """
    Create AppState from the provided settings and load persisted data.

    Keeping settings and the time/storage ports injectable makes the app easy to test
    and avoids hidden global config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if store is None:
        _ensure_local_dirs(settings)
        store = SqliteKeyValueStore(settings.store_path)

    clock = clock or SystemClock()
    if rng is None:
        seed = getattr(settings, "random_seed", None)
        rng = random.Random(seed) if seed is not None else random.Random()

    keys = StoreKeys(getattr(settings, "key_prefix", "taskspin_"))
    events = EventBus()

    prefs = SettingsModel(store, keys.settings)
    registry = TaskRegistry(store, keys.tasks, clock)
    scheduler = ResetScheduler(
        prefs,
        registry,
        store,
        keys.next_reset,
        events,
        clock,
        tz=resolve_timezone(getattr(settings, "timezone", None)),
    )
    wheel = WheelSelector(registry, prefs, events, rng=rng, sleep=sleep)

    prefs.load()
    registry.load()
    scheduler.load()

    state = AppState(
        settings=settings,
        store=store,
        clock=clock,
        events=events,
        prefs=prefs,
        registry=registry,
        scheduler=scheduler,
        wheel=wheel,
    )
    logger.info(
        "State ready: tasks=%d interval=%s next_reset=%s",
        len(registry),
        prefs.current.reset_interval.value,
        scheduler.next_reset_at.isoformat() if scheduler.next_reset_at else None,
    )
    return state
