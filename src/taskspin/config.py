# src/taskspin/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing required at import time: every value has a default.
- User preferences (theme, reset interval, ...) are NOT here; they live in
  the persistent store and are managed by prefs.settings_model.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKSPIN"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int_or_none(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    store_path: Path
    key_prefix: str

    # ---- Scheduling ----
    tick_seconds: float
    timezone: str | None

    # ---- Wheel ----
    random_seed: int | None

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskspin").strip() or "taskspin"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskspin"))
        store_path = _env_path(_k("STORE_PATH"), data_dir / "taskspin.sqlite3")
        key_prefix = _env(_k("KEY_PREFIX"), "taskspin_")

        # The reset loop never polls faster than twice a second.
        tick_seconds = max(0.5, _env_float(_k("TICK_SECONDS"), 1.0))
        timezone = _env(_k("TIMEZONE"), "").strip() or None

        random_seed = _env_int_or_none(_k("RANDOM_SEED"))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            store_path=store_path,
            key_prefix=key_prefix,
            tick_seconds=tick_seconds,
            timezone=timezone,
            random_seed=random_seed,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
