# src/taskspin/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.commands import render_task_list
from ..core.events import EventKind
from ..core.state import AppState
from ..tasks.wheel import WheelResult

logger = logging.getLogger(__name__)

ReadLine = Callable[[str], Awaitable[str]]


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _today_label() -> str:
    # e.g. "Saturday, October 17, 2026"
    now = datetime.now().astimezone()
    return f"{now:%A}, {now:%B} {now.day}, {now.year}"


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


async def _read_stdin(prompt: str) -> str:
    # input() blocks, so it runs in a worker thread; the result is handled back on the loop.
    return await asyncio.to_thread(input, prompt)


def _subscribe_notifications(state: AppState) -> list[Callable[[], None]]:
    def on_reset(_payload) -> None:
        _print_ts("Tasks have been reset!")

    def on_wheel(result: WheelResult) -> None:
        if result.none_available:
            _print_ts(result.message)
        else:
            _print_ts(f"\N{DIRECT HIT} {result.message}")

    return [
        state.events.subscribe(EventKind.TASKS_RESET, on_reset),
        state.events.subscribe(EventKind.WHEEL_RESULT, on_wheel),
    ]


async def run_console_loop(state: AppState, *, read_line: ReadLine = _read_stdin) -> None:
    logger.info("Console connector started.")
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "taskspin"))

    _print_ts(f"[{app_name}] {_today_label()}")
    _print_ts(f"{state.prefs.interval_label()} - next reset in {state.scheduler.tick().countdown}")
    print(render_task_list(state.registry.list_all()))
    _print_ts("Type a task to add it. Use /help for commands. Use /exit to quit.\n")

    unsubscribers = _subscribe_notifications(state)

    def emit(text: str) -> None:
        _print_ts(text)

    try:
        while True:
            try:
                user_input = (await read_line(">>> ")).strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break

            if not user_input:
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            line = user_input if user_input.startswith("/") else f"/add {user_input}"

            try:
                cmd_response = command_registry.handle(state, line, emit=emit)
            except Exception:
                logger.exception("Command handler crashed.")
                cmd_response = "Internal error while handling a command."

            if cmd_response:
                print(f"[{_ts_local()}] {cmd_response}", flush=True)

            # Let a just-started spin with zero delay report before the next prompt.
            await asyncio.sleep(0)
    finally:
        for unsubscribe in unsubscribers:
            unsubscribe()
        logger.info("Console connector finished.")
