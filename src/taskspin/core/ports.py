# src/taskspin/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage and time sources swappable and lets tests drive the
scheduler and the wheel with a fake clock instead of real wall-clock delays.
"""

from datetime import datetime
from typing import Awaitable, Callable, Iterable, Protocol

SleepFn = Callable[[float], Awaitable[None]]
# Delay-after capability: asyncio.sleep in production, a fake that advances a fake clock in tests.


class KeyValueStore(Protocol):
    """Durable string-keyed blob store (the only durability boundary)."""

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
    def delete(self, key: str) -> None: ...
    def keys(self) -> Iterable[str]: ...


class Clock(Protocol):
    """Source of the current instant. Must return a timezone-aware datetime."""

    def now(self) -> datetime: ...
