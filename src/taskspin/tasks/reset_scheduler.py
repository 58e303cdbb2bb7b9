# src/taskspin/tasks/reset_scheduler.py

from __future__ import annotations

"""
Reset scheduler.

A small polling loop that:
- keeps the absolute instant of the next reset (persisted as epoch ms),
- on every tick compares it with the clock,
- when due: clears all completion flags, computes the following instant
  and emits TASKS_RESET,
- renders the remaining time as HH:MM:SS for the presentation layer.

The scheduler does not watch settings. Whoever changes the reset interval or
the custom hours calls reschedule() right after the change.

There is no drift compensation: with a 1 s poll a reset can fire up to ~1 s late.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, time, timedelta, tzinfo

from ..core.clock import from_epoch_ms, to_epoch_ms
from ..core.events import EventBus, EventKind
from ..core.ports import Clock, KeyValueStore, SleepFn
from ..prefs.models import ResetInterval, UserSettings
from ..prefs.settings_model import SettingsModel
from .task_registry import TaskRegistry

logger = logging.getLogger(__name__)

_MS_PER_HOUR = 60 * 60 * 1000
_MS_PER_MINUTE = 60 * 1000


def next_local_midnight(now: datetime, tz: tzinfo | None = None) -> datetime:
    """
    First local midnight strictly after `now`.

    tz=None follows the OS local zone as it is at call time.
    """
    if now.tzinfo is None:
        raise ValueError("now must be timezone-aware")

    local_now = now.astimezone(tz) if tz is not None else now.astimezone()
    tomorrow = local_now.date() + timedelta(days=1)

    if tz is not None:
        return datetime.combine(tomorrow, time(0, 0), tzinfo=tz)
    # Naive -> aware in the OS local zone (DST rules applied for that date).
    return datetime.combine(tomorrow, time(0, 0)).astimezone()


def calculate_next_reset_time(
    settings: UserSettings,
    now: datetime,
    tz: tzinfo | None = None,
) -> datetime:
    interval = settings.reset_interval
    if interval == ResetInterval.SIX_HOURS:
        return now + timedelta(hours=6)
    if interval == ResetInterval.TWELVE_HOURS:
        return now + timedelta(hours=12)
    if interval == ResetInterval.CUSTOM:
        return now + timedelta(hours=settings.custom_hours)
    return next_local_midnight(now, tz)


def format_countdown(time_left_ms: int) -> str:
    """Milliseconds -> HH:MM:SS (floor, zero padded, never negative)."""
    ms = max(0, int(time_left_ms))
    hours = ms // _MS_PER_HOUR
    minutes = (ms % _MS_PER_HOUR) // _MS_PER_MINUTE
    seconds = (ms % _MS_PER_MINUTE) // 1000
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


@dataclass(slots=True, frozen=True)
class TickResult:
    time_left_ms: int
    countdown: str
    reset_fired: bool


class ResetScheduler:
    def __init__(
        self,
        settings_model: SettingsModel,
        registry: TaskRegistry,
        store: KeyValueStore,
        key: str,
        events: EventBus,
        clock: Clock,
        *,
        tz: tzinfo | None = None,
    ) -> None:
        self._settings = settings_model
        self._registry = registry
        self._store = store
        self._key = key
        self._events = events
        self._clock = clock
        self._tz = tz

        self._next_reset_at: datetime | None = None
        self._countdown = format_countdown(0)

    @property
    def next_reset_at(self) -> datetime | None:
        return self._next_reset_at

    @property
    def next_reset_ms(self) -> int | None:
        return None if self._next_reset_at is None else to_epoch_ms(self._next_reset_at)

    @property
    def countdown(self) -> str:
        return self._countdown

    def load(self) -> datetime:
        """Restore the persisted instant, or compute and persist a fresh one."""
        raw = self._store.get(self._key)
        if raw is not None:
            try:
                self._next_reset_at = from_epoch_ms(int(raw.strip()))
                logger.info("Next reset restored: %s", self._next_reset_at.isoformat())
                return self._next_reset_at
            except (ValueError, OverflowError, OSError):
                logger.warning("Stored next reset %r is not an epoch-ms integer; recomputing.", raw)
        return self.reschedule()

    def reschedule(self) -> datetime:
        """Recompute the next reset from the current settings and persist it."""
        now = self._clock.now()
        self._next_reset_at = calculate_next_reset_time(self._settings.current, now, self._tz)
        self._store.set(self._key, str(to_epoch_ms(self._next_reset_at)))
        logger.info(
            "Next reset at %s (%s)",
            self._next_reset_at.isoformat(),
            self._settings.current.reset_interval.value,
        )
        return self._next_reset_at

    def time_left_ms(self) -> int:
        next_at = self._next_reset_at
        if next_at is None:
            next_at = self.reschedule()
        return to_epoch_ms(next_at) - to_epoch_ms(self._clock.now())

    def tick(self) -> TickResult:
        time_left = self.time_left_ms()
        fired = False

        if time_left <= 0:
            logger.info("Reset due (late by %d ms); clearing completion flags.", -time_left)
            # The new instant must be persisted before anything is cleared.
            self.reschedule()
            self._registry.reset_all()
            self._events.emit(EventKind.TASKS_RESET, self._registry.list_all())
            fired = True
            time_left = self.time_left_ms()

        self._countdown = format_countdown(time_left)
        return TickResult(time_left_ms=time_left, countdown=self._countdown, reset_fired=fired)


async def run_reset_scheduler(
        scheduler: ResetScheduler,
        *,
        interval_seconds: float = 1.0,
        sleep: SleepFn = asyncio.sleep,
) -> None:
    """
    Simple polling loop: tick immediately, then every interval_seconds.

    A failing tick is logged and the loop keeps going.
    To stop the scheduler, cancel the coroutine/task.
    """
    sleep_s = max(0.0, float(interval_seconds))
    logger.info("Reset scheduler started (interval=%.2fs)", sleep_s)

    while True:
        try:
            scheduler.tick()
        except Exception:
            logger.exception("reset scheduler tick failed")

        await sleep(sleep_s)
