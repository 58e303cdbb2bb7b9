# src/taskspin/tasks/wheel.py

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass

from ..core.events import EventBus, EventKind
from ..core.ports import SleepFn
from ..prefs.settings_model import SettingsModel
from .task_models import Task
from .task_registry import TaskRegistry

logger = logging.getLogger(__name__)

NONE_AVAILABLE_TEXT = "No incomplete tasks to choose from!"


@dataclass(slots=True, frozen=True)
class WheelResult:
    """Outcome of a spin: the picked task, or None when nothing was left to pick."""

    task: Task | None

    @property
    def none_available(self) -> bool:
        return self.task is None

    @property
    def message(self) -> str:
        if self.task is None:
            return NONE_AVAILABLE_TEXT
        return f"Try this: {self.task.text}"


class WheelSelector:
    """
    Uniform random pick among incomplete tasks, revealed after an artificial delay.

    The candidate pool is snapshotted when the spin starts. The selector does not
    guard against overlapping spins; the caller does (see core.actions.request_spin).
    """

    def __init__(
        self,
        registry: TaskRegistry,
        settings_model: SettingsModel,
        events: EventBus,
        *,
        rng: random.Random | None = None,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self._registry = registry
        self._settings = settings_model
        self._events = events
        self._rng = rng or random.Random()
        self._sleep = sleep

    async def spin(self) -> WheelResult:
        incomplete = self._registry.list_incomplete()

        if not incomplete:
            result = WheelResult(task=None)
            logger.info("Spin: no incomplete tasks")
            self._events.emit(EventKind.WHEEL_RESULT, result)
            return result

        picked = incomplete[self._rng.randrange(len(incomplete))]
        delay_ms = max(0, self._settings.current.wheel_speed)
        logger.debug("Spin: %d candidate(s), revealing in %d ms", len(incomplete), delay_ms)

        await self._sleep(delay_ms / 1000)

        result = WheelResult(task=picked)
        logger.info("Spin picked task id=%s", picked.id)
        self._events.emit(EventKind.WHEEL_RESULT, result)
        return result
