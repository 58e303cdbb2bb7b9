# src/taskspin/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .events import EventBus
from .ports import Clock, KeyValueStore

if TYPE_CHECKING:
    from ..prefs.settings_model import SettingsModel
    from ..tasks.reset_scheduler import ResetScheduler
    from ..tasks.task_registry import TaskRegistry
    from ..tasks.wheel import WheelSelector


@dataclass
class AppState:
    """
    The single application context (lifetime = process).

    Built once by cli.bootstrap (or by tests with fakes) and passed to every
    command handler and action. Only the event-loop thread mutates it.
    """

    # Store Settings on the state for easy access in other modules later.
    settings: object

    store: KeyValueStore
    clock: Clock
    events: EventBus

    prefs: SettingsModel
    registry: TaskRegistry
    scheduler: ResetScheduler
    wheel: WheelSelector

    # True while a wheel spin is outstanding; a second spin is rejected meanwhile.
    spinning: bool = False
