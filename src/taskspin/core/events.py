# src/taskspin/core/events.py

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)

Listener = Callable[[Any], None]


class EventKind(StrEnum):
    """Notifications the core emits for the presentation layer."""

    TASKS_RESET = "tasks_reset"
    WHEEL_RESULT = "wheel_result"


class EventBus:
    """
    Synchronous in-process pub/sub.

    Listeners run on the emitter's (single) thread, in subscription order.
    A failing listener is logged and does not affect the others or the emitter.
    """

    def __init__(self) -> None:
        self._listeners: dict[EventKind, list[Listener]] = {}

    def subscribe(self, kind: EventKind, listener: Listener) -> Callable[[], None]:
        self._listeners.setdefault(kind, []).append(listener)

        def unsubscribe() -> None:
            listeners = self._listeners.get(kind, [])
            if listener in listeners:
                listeners.remove(listener)

        return unsubscribe

    def emit(self, kind: EventKind, payload: Any = None) -> None:
        for listener in list(self._listeners.get(kind, [])):
            try:
                listener(payload)
            except Exception:
                logger.exception("Event listener failed kind=%s", kind.value)
