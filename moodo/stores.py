"""Task and mood store collaborators.

The engine only needs a narrow view of each store: read the task pool,
write back an affect tag, read the current mood. Anything richer (CRUD,
sync, history screens) lives outside this package.
"""

from __future__ import annotations

import threading
from datetime import datetime
from typing import Protocol

from moodo.models import Affect, Mood, Task


class TaskStore(Protocol):
    def list_tasks(self) -> list[Task]: ...

    def update_affect(self, task_id: str, affect: Affect) -> None: ...


class MoodStore(Protocol):
    def current_mood(self) -> Mood | None: ...


class InMemoryTaskStore:
    """Task store backed by a dict, preserving insertion order."""

    def __init__(self, tasks: list[Task] | None = None):
        self._tasks: dict[str, Task] = {task.id: task for task in tasks or []}
        self._lock = threading.Lock()

    def list_tasks(self) -> list[Task]:
        with self._lock:
            return list(self._tasks.values())

    def add(self, task: Task) -> None:
        with self._lock:
            self._tasks[task.id] = task

    def get(self, task_id: str) -> Task | None:
        with self._lock:
            return self._tasks.get(task_id)

    def update_affect(self, task_id: str, affect: Affect) -> None:
        with self._lock:
            task = self._tasks.get(task_id)
            if task is None:
                raise KeyError(f"Task not found: {task_id}")
            task.affect = affect


class InMemoryMoodStore:
    """Current mood plus a timestamped history of mood entries."""

    def __init__(self, mood: Mood | str | None = None):
        self._history: list[tuple[datetime, Mood]] = []
        if mood is not None:
            self.set_mood(mood)

    def set_mood(self, mood: Mood | str, at: datetime | None = None) -> Mood:
        parsed = Mood.parse(mood)
        self._history.append((at or datetime.now(), parsed))
        return parsed

    def current_mood(self) -> Mood | None:
        return self._history[-1][1] if self._history else None

    @property
    def history(self) -> list[tuple[datetime, Mood]]:
        return list(self._history)
