# src/taskspin/core/actions.py

from __future__ import annotations

"""
Action interface of the core.

Presentation code never pokes the components directly: it builds an action and
calls dispatch(state, action), which applies it (persisting on the way) and
returns a read-only snapshot to render. Wheel spins are asynchronous and go
through request_spin().
"""

import logging
from dataclasses import dataclass
from typing import Any

from ..prefs.models import ResetInterval, UserSettings
from ..tasks.task_models import Task
from ..tasks.wheel import WheelResult
from .state import AppState

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AddTask:
    text: str


@dataclass(frozen=True, slots=True)
class ToggleTask:
    task_id: int


@dataclass(frozen=True, slots=True)
class DeleteTask:
    task_id: int


@dataclass(frozen=True, slots=True)
class ResetAll:
    pass


@dataclass(frozen=True, slots=True)
class SetTheme:
    theme: Any


@dataclass(frozen=True, slots=True)
class UpdateResetInterval:
    value: Any


@dataclass(frozen=True, slots=True)
class UpdateCustomHours:
    raw: Any


@dataclass(frozen=True, slots=True)
class UpdateWheelSpeed:
    raw: Any


Action = (
    AddTask
    | ToggleTask
    | DeleteTask
    | ResetAll
    | SetTheme
    | UpdateResetInterval
    | UpdateCustomHours
    | UpdateWheelSpeed
)


@dataclass(frozen=True, slots=True)
class AppSnapshot:
    tasks: tuple[Task, ...]
    settings: UserSettings
    countdown: str
    interval_label: str
    next_reset_ms: int | None
    spinning: bool

    @property
    def incomplete_count(self) -> int:
        return sum(1 for t in self.tasks if not t.completed)


def snapshot(state: AppState) -> AppSnapshot:
    # Copies, so later mutations do not leak into an already rendered snapshot.
    tasks = tuple(Task(t.id, t.text, t.completed, t.created_at) for t in state.registry.list_all())
    return AppSnapshot(
        tasks=tasks,
        settings=state.prefs.current,
        countdown=state.scheduler.countdown,
        interval_label=state.prefs.interval_label(),
        next_reset_ms=state.scheduler.next_reset_ms,
        spinning=state.spinning,
    )


def dispatch(state: AppState, action: Action) -> AppSnapshot:
    match action:
        case AddTask(text=text):
            state.registry.add(text)
        case ToggleTask(task_id=task_id):
            state.registry.toggle(task_id)
        case DeleteTask(task_id=task_id):
            state.registry.delete(task_id)
        case ResetAll():
            state.registry.reset_all()
        case SetTheme(theme=theme):
            state.prefs.set_theme(theme)
        case UpdateResetInterval(value=value):
            state.prefs.set_reset_interval(value)
            state.scheduler.reschedule()
        case UpdateCustomHours(raw=raw):
            state.prefs.set_custom_hours(raw)
            if state.prefs.current.reset_interval == ResetInterval.CUSTOM:
                state.scheduler.reschedule()
        case UpdateWheelSpeed(raw=raw):
            state.prefs.set_wheel_speed(raw)
        case _:
            raise TypeError(f"Unsupported action: {action!r}")

    return snapshot(state)


async def request_spin(state: AppState) -> WheelResult | None:
    """
    Start a wheel spin unless one is already outstanding.

    Returns None when the request was rejected.
    """
    if state.spinning:
        logger.info("Spin requested while another spin is pending; ignored.")
        return None

    state.spinning = True
    try:
        return await state.wheel.spin()
    finally:
        state.spinning = False
