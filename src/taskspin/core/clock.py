# src/taskspin/core/clock.py

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_ONE_MS = timedelta(milliseconds=1)


class SystemClock:
    """Wall clock in the OS local zone."""

    def now(self) -> datetime:
        return datetime.now().astimezone()


def resolve_timezone(name: str | None) -> tzinfo | None:
    """
    IANA zone name -> tzinfo.

    None means "follow the OS local zone", re-read on every computation.
    An unknown name is logged and treated the same way.
    """
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r; using the OS local zone.", name)
        return None


def to_epoch_ms(dt: datetime) -> int:
    if dt.tzinfo is None:
        raise ValueError("dt must be timezone-aware")
    return (dt - _EPOCH) // _ONE_MS


def from_epoch_ms(ms: int) -> datetime:
    return _EPOCH + timedelta(milliseconds=ms)


def iso_utc_ms(dt: datetime) -> str:
    """2026-10-17T09:30:00.000Z"""
    u = dt.astimezone(UTC)
    return u.strftime("%Y-%m-%dT%H:%M:%S.") + f"{u.microsecond // 1000:03d}Z"
