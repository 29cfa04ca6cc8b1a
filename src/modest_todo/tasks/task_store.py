# src/modest_todo/tasks/task_store.py

from __future__ import annotations

import dataclasses
import logging
import time
from collections.abc import Callable, Iterable
from datetime import date

from .task_errors import LoadError, NotFoundError
from .task_models import Priority, Task, clean_title, parse_due_date

logger = logging.getLogger(__name__)

Clock = Callable[[], int]


def wall_clock_ms() -> int:
    return int(time.time() * 1000)


class TaskStore:
    """
    In-memory, insertion-ordered task collection.

    The store is the only owner of Task objects and of the id counter.
    It does no I/O: persistence goes through the file gateway, which reads
    snapshot() and next_id.

    Ids are never reused: the counter only moves forward, and on load it is
    seeded past every persisted id.
    """

    def __init__(self, *, clock: Clock | None = None, next_id: int = 1) -> None:
        self._tasks: list[Task] = []
        self._next_id = max(1, int(next_id))
        self._clock: Clock = clock or wall_clock_ms

    @classmethod
    def from_tasks(
        cls,
        tasks: Iterable[Task],
        *,
        next_id: int | None = None,
        clock: Clock | None = None,
    ) -> TaskStore:
        store = cls(clock=clock)
        seen: set[int] = set()
        max_id = 0
        for task in tasks:
            if task.id in seen:
                raise LoadError(f"Duplicate task id {task.id}")
            seen.add(task.id)
            max_id = max(max_id, task.id)
            store._tasks.append(task)
        store._next_id = max(max_id + 1, next_id or 1)
        logger.debug("TaskStore restored total=%s next_id=%s", len(store._tasks), store._next_id)
        return store

    # ---- low-level helpers ----

    def _find(self, task_id: int) -> Task:
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise NotFoundError(task_id)

    # ---- public API ----

    def __len__(self) -> int:
        return len(self._tasks)

    @property
    def next_id(self) -> int:
        return self._next_id

    def add(
        self,
        title: str,
        detail: str,
        priority: Priority | int | str,
        due_date: date | str,
    ) -> Task:
        # Build (and so validate) before touching the counter.
        task = Task.create(
            task_id=self._next_id,
            title=title,
            detail=detail,
            priority=priority,
            due_date=due_date,
            created_at=self._clock(),
        )
        self._next_id += 1
        self._tasks.append(task)
        logger.debug(
            "Task added id=%s priority=%s due=%s", task.id, task.priority.label, task.due_date
        )
        return dataclasses.replace(task)

    def get(self, task_id: int) -> Task:
        return dataclasses.replace(self._find(task_id))

    def update(
        self,
        task_id: int,
        title: str,
        detail: str,
        priority: Priority | int | str,
        due_date: date | str,
    ) -> None:
        task = self._find(task_id)

        clean = clean_title(title)
        prio = Priority.parse(priority)
        due = parse_due_date(due_date)

        task.apply_edit(title=clean, detail=(detail or "").strip(), priority=prio, due_date=due)
        logger.debug("Task updated id=%s", task_id)

    def toggle(self, task_id: int) -> None:
        task = self._find(task_id)
        task.toggle()
        logger.debug("Task toggled id=%s completed=%s", task_id, task.completed)

    def remove(self, task_id: int) -> None:
        task = self._find(task_id)
        self._tasks.remove(task)
        logger.debug("Task removed id=%s", task_id)

    def snapshot(self) -> tuple[Task, ...]:
        """Current tasks in insertion order, as copies."""
        return tuple(dataclasses.replace(t) for t in self._tasks)
