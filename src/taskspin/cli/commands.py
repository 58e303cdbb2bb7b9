# src/taskspin/cli/commands.py

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.actions import (
    AddTask,
    DeleteTask,
    ResetAll,
    SetTheme,
    ToggleTask,
    UpdateCustomHours,
    UpdateResetInterval,
    UpdateWheelSpeed,
    dispatch,
    request_spin,
    snapshot,
)
from ..core.state import AppState
from ..prefs.models import ResetInterval, Theme
from ..tasks.task_models import Task

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

EMPTY_LIST_TEXT = "No tasks yet. Add your first task above!"

logger = logging.getLogger(__name__)

# Keep references to in-flight spins so they are not garbage-collected mid-await.
_pending_spins: set[asyncio.Task] = set()


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, /spin, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def render_task_list(tasks: list[Task] | tuple[Task, ...]) -> str:
    if not tasks:
        return EMPTY_LIST_TEXT
    lines = []
    for i, t in enumerate(tasks, start=1):
        mark = "x" if t.completed else " "
        lines.append(f"{i:>2}. [{mark}] {t.text}")
    return "\n".join(lines)


def _resolve_task_id(state: AppState, ref: str) -> int | None:
    """
    "3" -> id of the 3rd task in list order; a full task id is accepted as well.
    """
    try:
        n = int(ref)
    except ValueError:
        return None
    tasks = state.registry.list_all()
    if 1 <= n <= len(tasks):
        return tasks[n - 1].id
    return n


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_task_list(state.registry.list_all())


def cmd_add(state: AppState, args: list[str]) -> str:
    text = " ".join(args).strip()
    if not text:
        return "Usage: /add <task text>"
    before = len(state.registry)
    snap = dispatch(state, AddTask(text))
    if len(snap.tasks) == before:
        return "Nothing added."
    return f"Added: {snap.tasks[-1].text}"


def cmd_done(state: AppState, args: list[str]) -> str:
    """
    /done 2   -> toggle completion of task #2
    """
    if not args:
        return "Usage: /done <number>"
    task_id = _resolve_task_id(state, args[0])
    if task_id is None:
        return "Usage: /done <number>"
    snap = dispatch(state, ToggleTask(task_id))
    return render_task_list(snap.tasks)


def cmd_delete(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /del <number>"
    task_id = _resolve_task_id(state, args[0])
    if task_id is None:
        return "Usage: /del <number>"
    snap = dispatch(state, DeleteTask(task_id))
    return render_task_list(snap.tasks)


def cmd_reset(state: AppState, args: list[str]) -> str:
    snap = dispatch(state, ResetAll())
    return f"All {len(snap.tasks)} task(s) marked incomplete."


def cmd_timer(state: AppState, args: list[str]) -> str:
    countdown = state.scheduler.tick().countdown
    return f"{state.prefs.interval_label()}: next reset in {countdown}"


def cmd_theme(state: AppState, args: list[str]) -> str:
    choices = " | ".join(t.value for t in Theme)
    if not args:
        return f"Theme is {state.prefs.current.theme.value}. Use /theme {choices}."
    if args[0].lower() not in {t.value for t in Theme}:
        return f"Usage: /theme {choices}"
    snap = dispatch(state, SetTheme(args[0]))
    return f"Theme set to {snap.settings.theme.value}."


def cmd_interval(state: AppState, args: list[str]) -> str:
    """
    /interval            -> show current interval
    /interval 6h         -> reset every 6 hours (next reset recomputed now)
    /interval custom 8   -> reset every 8 hours
    """
    choices = " | ".join(i.value for i in ResetInterval)
    if not args:
        return f"Reset interval: {state.prefs.interval_label()}. Use /interval {choices}."
    value = args[0].lower()
    if value not in {i.value for i in ResetInterval}:
        return f"Usage: /interval {choices}"

    if value == ResetInterval.CUSTOM and len(args) > 1:
        dispatch(state, UpdateCustomHours(args[1]))
    snap = dispatch(state, UpdateResetInterval(value))
    return f"Reset interval: {snap.interval_label}. Next reset in {state.scheduler.tick().countdown}."


def cmd_hours(state: AppState, args: list[str]) -> str:
    if not args:
        return f"Custom interval is {state.prefs.current.custom_hours} hour(s). Use /hours <n>."
    snap = dispatch(state, UpdateCustomHours(args[0]))
    note = "" if snap.settings.reset_interval == ResetInterval.CUSTOM else " (used when /interval custom)"
    return f"Custom interval set to {snap.settings.custom_hours} hour(s){note}."


def cmd_speed(state: AppState, args: list[str]) -> str:
    if not args:
        return f"Wheel speed is {state.prefs.wheel_speed_label()}. Use /speed <milliseconds>."
    dispatch(state, UpdateWheelSpeed(args[0]))
    return f"Wheel speed set to {state.prefs.wheel_speed_label()}."


def cmd_status(state: AppState, args: list[str]) -> str:
    snap = snapshot(state)
    s = snap.settings
    return (
        "Status:\n"
        f"  Tasks: {len(snap.tasks)} ({snap.incomplete_count} incomplete)\n"
        f"  Reset: {snap.interval_label} (next in {snap.countdown})\n"
        f"  Theme: {s.theme.value}\n"
        f"  Wheel speed: {state.prefs.wheel_speed_label()}"
    )


def cmd_spin(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    Start a wheel spin in the background; the result arrives as a WHEEL_RESULT event.
    """
    if state.spinning:
        return "The wheel is already spinning..."

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        return "The wheel needs a running event loop."

    task = loop.create_task(request_spin(state))
    _pending_spins.add(task)
    task.add_done_callback(_pending_spins.discard)

    if not state.registry.list_incomplete():
        return ""
    logger.debug("Spin started from console")
    return f"Spinning the wheel ({state.prefs.wheel_speed_label()})..."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the task list.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <text> (bare text works too).")
registry.register("done", cmd_done, help_text="Toggle completion: /done <number>.", aliases=["toggle"])
registry.register("del", cmd_delete, help_text="Delete a task: /del <number>.", aliases=["rm"])
registry.register("reset", cmd_reset, help_text="Mark every task incomplete now.")
registry.register("spin", cmd_spin, help_text="Pick a random incomplete task.")
registry.register("timer", cmd_timer, help_text="Show time left until the next automatic reset.")
registry.register("theme", cmd_theme, help_text="Theme: /theme light | /theme dark.")
registry.register(
    "interval", cmd_interval, help_text="Reset interval: /interval daily | 6h | 12h | custom [hours]."
)
registry.register("hours", cmd_hours, help_text="Custom interval length: /hours <n>.")
registry.register("speed", cmd_speed, help_text="Wheel delay: /speed <milliseconds>.")
registry.register("status", cmd_status, help_text="Show tasks, reset schedule and preferences.")
