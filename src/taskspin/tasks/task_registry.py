# src/taskspin/tasks/task_registry.py

from __future__ import annotations

import json
import logging
from collections.abc import Iterator

from ..core.clock import iso_utc_ms, to_epoch_ms
from ..core.ports import Clock, KeyValueStore
from .task_models import Task

logger = logging.getLogger(__name__)


class TaskRegistry:
    """
    Ordered task list persisted as one JSON array under a single key.

    Invariants:
    - ids are unique (epoch-ms at creation, bumped past the last issued id)
    - order is insertion order; delete removes in place
    - every mutation is persisted before the method returns

    Unknown ids are not errors: toggle/delete simply do nothing.
    """

    def __init__(self, store: KeyValueStore, key: str, clock: Clock) -> None:
        self._store = store
        self._key = key
        self._clock = clock
        self._tasks: list[Task] = []
        self._last_id = 0

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    # ---- persistence ----

    def load(self) -> list[Task]:
        raw = self._store.get(self._key)
        self._tasks = []
        if raw is None:
            self._last_id = 0
            return []

        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Stored tasks are not valid JSON; starting with an empty list.")
            data = []

        if not isinstance(data, list):
            logger.warning("Stored tasks are not a list; starting with an empty list.")
            data = []

        seen: set[int] = set()
        skipped = 0
        for item in data:
            task = Task.from_dict(item) if isinstance(item, dict) else None
            if task is None or task.id in seen:
                skipped += 1
                continue
            seen.add(task.id)
            self._tasks.append(task)

        if skipped:
            logger.warning("Skipped %d malformed or duplicate stored task(s).", skipped)

        self._last_id = max(seen, default=0)
        logger.info("Tasks loaded: %d", len(self._tasks))
        return self.list_all()

    def save(self) -> None:
        payload = [t.to_dict() for t in self._tasks]
        self._store.set(self._key, json.dumps(payload, ensure_ascii=False))

    # ---- queries ----

    def list_all(self) -> list[Task]:
        return list(self._tasks)

    def list_incomplete(self) -> list[Task]:
        return [t for t in self._tasks if not t.completed]

    def get(self, task_id: int) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    # ---- mutations ----

    def _next_id(self) -> int:
        now = self._clock.now()
        task_id = max(to_epoch_ms(now), self._last_id + 1)
        self._last_id = task_id
        return task_id

    def add(self, text: str) -> Task | None:
        clean = (text or "").strip()
        if not clean:
            return None

        task = Task(
            id=self._next_id(),
            text=clean,
            completed=False,
            created_at=iso_utc_ms(self._clock.now()),
        )
        self._tasks.append(task)
        self.save()
        logger.debug("Task added id=%s", task.id)
        return task

    def toggle(self, task_id: int) -> Task | None:
        task = self.get(task_id)
        if task is None:
            logger.debug("toggle: no task id=%s", task_id)
            return None
        task.completed = not task.completed
        self.save()
        logger.debug("Task %s -> completed=%s", task_id, task.completed)
        return task

    def delete(self, task_id: int) -> bool:
        before = len(self._tasks)
        self._tasks = [t for t in self._tasks if t.id != task_id]
        removed = len(self._tasks) != before
        if not removed:
            logger.debug("delete: no task id=%s", task_id)
        self.save()
        return removed

    def reset_all(self) -> int:
        """Clear every completion flag. Returns how many tasks were completed before."""
        cleared = 0
        for t in self._tasks:
            if t.completed:
                cleared += 1
            t.completed = False
        self.save()
        logger.info("All tasks reset (cleared=%d total=%d)", cleared, len(self._tasks))
        return cleared
