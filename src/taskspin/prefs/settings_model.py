# src/taskspin/prefs/settings_model.py

from __future__ import annotations

import json
import logging
from typing import Any

from ..core.ports import KeyValueStore
from .models import ResetInterval, Theme, UserSettings, parse_custom_hours, parse_wheel_speed

logger = logging.getLogger(__name__)


class SettingsModel:
    """
    User preferences, persisted as one JSON object under a single key.

    Every update() persists immediately (no batching). The next reset instant is
    NOT recomputed here: callers that change the interval or the custom hours
    must ask the reset scheduler to reschedule.
    """

    def __init__(self, store: KeyValueStore, key: str) -> None:
        self._store = store
        self._key = key
        self._current = UserSettings()

    @property
    def current(self) -> UserSettings:
        return self._current

    def load(self) -> UserSettings:
        raw = self._store.get(self._key)
        if raw is None:
            self._current = UserSettings()
            return self._current

        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Stored settings are not valid JSON; using defaults.")
            data = None

        if not isinstance(data, dict):
            if data is not None:
                logger.warning("Stored settings are not an object; using defaults.")
            self._current = UserSettings()
            return self._current

        self._current = UserSettings.from_dict(data)
        logger.debug("Settings loaded: %s", self._current.to_dict())
        return self._current

    def _persist(self, settings: UserSettings) -> None:
        self._store.set(self._key, json.dumps(settings.to_dict(), ensure_ascii=False))

    def update(self, **partial: Any) -> UserSettings:
        """
        Shallow-merge the given fields over the current settings, then persist.

        Values go through the same coercions as load(). The new settings become
        current only after the store write succeeded.
        """
        updated = self._current.merged(**partial)
        self._persist(updated)
        self._current = updated
        logger.info("Settings updated: %s", ", ".join(sorted(partial)))
        return self._current

    # ---- coercing setters (raw user input) ----

    def set_theme(self, raw: Any) -> UserSettings:
        return self.update(theme=Theme.parse(raw))

    def set_reset_interval(self, raw: Any) -> UserSettings:
        return self.update(reset_interval=ResetInterval.parse(raw))

    def set_custom_hours(self, raw: Any) -> UserSettings:
        return self.update(custom_hours=parse_custom_hours(raw))

    def set_wheel_speed(self, raw: Any) -> UserSettings:
        return self.update(wheel_speed=parse_wheel_speed(raw))

    # ---- display helpers ----

    def interval_label(self) -> str:
        s = self._current
        if s.reset_interval == ResetInterval.SIX_HOURS:
            return "Every 6 Hours"
        if s.reset_interval == ResetInterval.TWELVE_HOURS:
            return "Every 12 Hours"
        if s.reset_interval == ResetInterval.CUSTOM:
            return f"Every {s.custom_hours} Hours"
        return "Daily Reset"

    def wheel_speed_label(self) -> str:
        return f"{self._current.wheel_speed / 1000:.1f}s"
