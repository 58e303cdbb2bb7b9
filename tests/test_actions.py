# tests/test_actions.py

from __future__ import annotations

import asyncio
import json
import random

import pytest

from taskspin.cli.bootstrap import create_initial_state
from taskspin.core.actions import (
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
)
from taskspin.prefs.models import ResetInterval, Theme

from .fakes import FakeKeyValueStore


def test_dispatch_task_actions_return_fresh_snapshots(state, store) -> None:
    snap = dispatch(state, AddTask("A"))
    snap = dispatch(state, AddTask("B"))
    assert [t.text for t in snap.tasks] == ["A", "B"]

    first_id = snap.tasks[0].id
    snap = dispatch(state, ToggleTask(first_id))
    assert snap.tasks[0].completed is True
    assert snap.incomplete_count == 1

    snap = dispatch(state, ResetAll())
    assert snap.incomplete_count == 2

    snap = dispatch(state, DeleteTask(first_id))
    assert [t.text for t in snap.tasks] == ["B"]

    # every mutation reached the store before dispatch returned
    stored = json.loads(store.get("taskspin_tasks"))
    assert [t["text"] for t in stored] == ["B"]


def test_snapshot_is_detached_from_live_state(state) -> None:
    snap = dispatch(state, AddTask("A"))
    dispatch(state, ToggleTask(snap.tasks[0].id))
    assert snap.tasks[0].completed is False


def test_unknown_ids_are_silent_noops(state) -> None:
    dispatch(state, AddTask("A"))
    snap = dispatch(state, ToggleTask(1))
    snap = dispatch(state, DeleteTask(2))
    assert [(t.text, t.completed) for t in snap.tasks] == [("A", False)]


def test_settings_actions(state, store) -> None:
    snap = dispatch(state, SetTheme("dark"))
    assert snap.settings.theme == Theme.DARK

    snap = dispatch(state, UpdateWheelSpeed("2500"))
    assert snap.settings.wheel_speed == 2500

    snap = dispatch(state, UpdateResetInterval("12h"))
    assert snap.settings.reset_interval == ResetInterval.TWELVE_HOURS
    assert snap.interval_label == "Every 12 Hours"

    snap = dispatch(state, UpdateCustomHours("-5"))
    assert snap.settings.custom_hours == 24

    assert json.loads(store.get("taskspin_settings")) == {
        "theme": "dark",
        "resetInterval": "12h",
        "customHours": 24,
        "wheelSpeed": 2500,
    }


def test_unsupported_action_raises(state) -> None:
    with pytest.raises(TypeError):
        dispatch(state, object())  # type: ignore[arg-type]


def test_state_is_restored_from_store(settings, clock, store) -> None:
    first = create_initial_state(settings=settings, store=store, clock=clock)
    dispatch(first, AddTask("A"))
    dispatch(first, UpdateResetInterval("6h"))
    next_reset = first.scheduler.next_reset_at

    clock.advance(hours=1)
    second = create_initial_state(settings=settings, store=store, clock=clock)
    assert [t.text for t in second.registry.list_all()] == ["A"]
    assert second.prefs.current.reset_interval == ResetInterval.SIX_HOURS
    # restored, not recomputed from the later clock
    assert second.scheduler.next_reset_at == next_reset


@pytest.mark.asyncio
async def test_second_spin_is_rejected_while_pending(settings, clock) -> None:
    gate = asyncio.Event()
    delays: list[float] = []

    async def gated_sleep(seconds: float) -> None:
        delays.append(seconds)
        await gate.wait()

    state = create_initial_state(
        settings=settings,
        store=FakeKeyValueStore(),
        clock=clock,
        rng=random.Random(0),
        sleep=gated_sleep,
    )
    dispatch(state, AddTask("A"))

    first = asyncio.create_task(request_spin(state))
    await asyncio.sleep(0)
    assert state.spinning is True

    assert await request_spin(state) is None

    gate.set()
    result = await first
    assert result is not None and result.task is not None
    assert result.task.text == "A"
    assert state.spinning is False
    assert delays == [1.5]


@pytest.mark.asyncio
async def test_spin_with_zero_speed_single_task(state) -> None:
    dispatch(state, UpdateWheelSpeed("0"))
    dispatch(state, AddTask("A"))
    result = await request_spin(state)
    assert result is not None and result.task is not None
    assert result.task.text == "A"


@pytest.mark.asyncio
async def test_spin_all_completed_is_none_available(state) -> None:
    snap = dispatch(state, AddTask("A"))
    dispatch(state, ToggleTask(snap.tasks[0].id))
    result = await request_spin(state)
    assert result is not None
    assert result.none_available is True
    assert state.spinning is False
