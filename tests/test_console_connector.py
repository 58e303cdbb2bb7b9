# tests/test_console_connector.py

from __future__ import annotations

import pytest

from taskspin.connectors.console_connector import run_console_loop
from taskspin.core.events import EventKind


def _script(*lines: str):
    pending = list(lines)

    async def read_line(prompt: str) -> str:
        if not pending:
            raise EOFError
        return pending.pop(0)

    return read_line


@pytest.mark.asyncio
async def test_bare_text_adds_task_and_exit_stops(state, capsys) -> None:
    await run_console_loop(state, read_line=_script("water plants", "", "/list", "/exit", "/add never"))

    assert [t.text for t in state.registry.list_all()] == ["water plants"]
    out = capsys.readouterr().out
    assert "No tasks yet" in out
    assert "Added: water plants" in out
    assert " 1. [ ] water plants" in out


@pytest.mark.asyncio
async def test_eof_ends_loop_and_unsubscribes(state, capsys) -> None:
    await run_console_loop(state, read_line=_script("/add A"))
    capsys.readouterr()

    # console listeners are gone once the loop has finished
    state.events.emit(EventKind.TASKS_RESET, [])
    assert capsys.readouterr().out == ""


@pytest.mark.asyncio
async def test_spin_result_is_printed(state, capsys) -> None:
    await run_console_loop(state, read_line=_script("/speed 0", "A", "/spin", "/exit"))
    out = capsys.readouterr().out
    assert "Try this: A" in out


@pytest.mark.asyncio
async def test_handler_crash_is_reported(state, capsys, monkeypatch) -> None:
    from taskspin.cli import commands

    def boom(state, args):
        raise RuntimeError("boom")

    monkeypatch.setitem(commands.registry._handlers, "list", boom)
    await run_console_loop(state, read_line=_script("/list", "/exit"))
    assert "Internal error while handling a command." in capsys.readouterr().out
