# src/taskspin/prefs/models.py

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

DEFAULT_CUSTOM_HOURS = 24
DEFAULT_WHEEL_SPEED_MS = 1500
# Keeps now + custom_hours well inside the datetime range.
MAX_CUSTOM_HOURS = 24 * 365 * 1000

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

# Python field name -> wire key.
_WIRE_KEYS = {
    "theme": "theme",
    "reset_interval": "resetInterval",
    "custom_hours": "customHours",
    "wheel_speed": "wheelSpeed",
}


class Theme(StrEnum):
    LIGHT = "light"
    DARK = "dark"

    @classmethod
    def parse(cls, raw: Any) -> Theme:
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return cls.LIGHT


class ResetInterval(StrEnum):
    """
    How often all completion flags are cleared.

    DAILY is "next local midnight", not a fixed 24h offset.
    """

    DAILY = "daily"
    SIX_HOURS = "6h"
    TWELVE_HOURS = "12h"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, raw: Any) -> ResetInterval:
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return cls.DAILY


def parse_leading_int(raw: Any) -> int | None:
    """Integer prefix of raw ("12abc" -> 12, "3.7" -> 3), None if there is none."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if math.isfinite(raw) else None
    m = _LEADING_INT.match(str(raw or ""))
    return int(m.group(1)) if m else None


def parse_custom_hours(raw: Any) -> int:
    n = parse_leading_int(raw)
    if n is None or n <= 0:
        return DEFAULT_CUSTOM_HOURS
    return min(n, MAX_CUSTOM_HOURS)


def parse_wheel_speed(raw: Any) -> int:
    n = parse_leading_int(raw)
    if n is None:
        return DEFAULT_WHEEL_SPEED_MS
    return max(0, n)


@dataclass(frozen=True, slots=True)
class UserSettings:
    theme: Theme = Theme.LIGHT
    reset_interval: ResetInterval = ResetInterval.DAILY
    custom_hours: int = DEFAULT_CUSTOM_HOURS
    wheel_speed: int = DEFAULT_WHEEL_SPEED_MS

    def to_dict(self) -> dict[str, Any]:
        return {
            "theme": self.theme.value,
            "resetInterval": self.reset_interval.value,
            "customHours": self.custom_hours,
            "wheelSpeed": self.wheel_speed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserSettings:
        """Merge known fields over the defaults; missing ones keep their default."""
        d = cls()
        return cls(
            theme=Theme.parse(data["theme"]) if "theme" in data else d.theme,
            reset_interval=(
                ResetInterval.parse(data["resetInterval"]) if "resetInterval" in data else d.reset_interval
            ),
            custom_hours=parse_custom_hours(data["customHours"]) if "customHours" in data else d.custom_hours,
            wheel_speed=parse_wheel_speed(data["wheelSpeed"]) if "wheelSpeed" in data else d.wheel_speed,
        )

    def merged(self, **partial: Any) -> UserSettings:
        """
        Return a copy with the given fields replaced, coerced like stored values.

        Accepts enum members or raw wire strings ("dark", "6h") and any
        leading-integer input for the numeric fields.
        """
        unknown = sorted(set(partial) - set(_WIRE_KEYS))
        if unknown:
            raise TypeError(f"Unknown settings field(s): {', '.join(unknown)}")
        data = self.to_dict()
        for name, value in partial.items():
            data[_WIRE_KEYS[name]] = value
        return UserSettings.from_dict(data)
