# src/taskspin/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class Task:
    id: int
    text: str
    completed: bool
    created_at: str  # ISO-8601 UTC, e.g. 2026-10-17T09:30:00.000Z

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task | None:
        """Build a Task from its stored form; None if the record is unusable."""
        raw_id = data.get("id")
        if isinstance(raw_id, bool) or not isinstance(raw_id, (int, float)):
            return None
        text = data.get("text")
        if not isinstance(text, str) or not text.strip():
            return None
        return cls(
            id=int(raw_id),
            text=text,
            completed=data.get("completed") is True,
            created_at=str(data.get("createdAt") or ""),
        )
