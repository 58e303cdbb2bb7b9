# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta


class FakeKeyValueStore:
    """
    In-memory KeyValueStore used by unit tests.

    Records every write so tests can assert that mutations persist immediately.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})
        self.writes: list[str] = []

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value
        self.writes.append(key)

    def delete(self, key: str) -> None:
        self.data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self.data)


@dataclass(slots=True)
class FakeClock:
    """Manually advanced clock (timezone-aware)."""

    current: datetime

    def now(self) -> datetime:
        return self.current

    def advance(self, **delta: float) -> None:
        self.current = self.current + timedelta(**delta)


@dataclass(slots=True)
class FakeSleep:
    """
    Replacement for asyncio.sleep: records requested delays and advances the fake clock
    instead of waiting. Optionally stops a polling loop after N calls.
    """

    clock: FakeClock | None = None
    stop_after: int | None = None
    delays: list[float] = field(default_factory=list)

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)
        if self.clock is not None:
            self.clock.advance(seconds=seconds)
        if self.stop_after is not None and len(self.delays) >= self.stop_after:
            raise StopLoop()


class StopLoop(Exception):
    """Raised by FakeSleep to end an otherwise infinite polling loop."""
