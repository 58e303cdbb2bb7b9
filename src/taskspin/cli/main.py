# src/taskspin/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs on one asyncio loop:
- the reset scheduler (1 Hz polling task),
- the console REPL.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.state import AppState
from ..logging_setup import setup_logging
from ..tasks.reset_scheduler import run_reset_scheduler

logger = logging.getLogger(__name__)


def _shutdown(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    # Every mutation is already persisted; this is only for the log trail.
    try:
        store = getattr(state, "store", None)
        if store is not None and hasattr(store, "close"):
            store.close()
    except Exception:
        logger.debug("Store close failed.", exc_info=True)


async def _run(state: AppState, *, tick_seconds: float) -> None:
    scheduler_task = asyncio.create_task(
        run_reset_scheduler(state.scheduler, interval_seconds=tick_seconds),
        name="reset-scheduler",
    )
    try:
        await run_console_loop(state)
    finally:
        scheduler_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await scheduler_task


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_dir = getattr(settings, "data_dir", ".local/taskspin")
    setup_logging(log_dir=log_dir, console_level=console_level)

    logger.info("Starting %s...", getattr(settings, "app_name", "taskspin"))

    # IMPORTANT: reuse same settings object
    state = create_initial_state(settings=settings)

    try:
        asyncio.run(_run(state, tick_seconds=settings.tick_seconds))
    except KeyboardInterrupt:
        logger.info("KeyboardInterrupt, shutting down...")
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
