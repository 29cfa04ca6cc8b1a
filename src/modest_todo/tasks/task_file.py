# src/modest_todo/tasks/task_file.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any

from .task_errors import LoadError, SaveError, ValidationError
from .task_models import Priority, Task, split_raw_text

logger = logging.getLogger(__name__)

FORMAT_VERSION = 2


@dataclass(slots=True)
class LoadedTasks:
    tasks: list[Task] = field(default_factory=list)
    next_id: int = 1


class TaskFile:
    """
    JSON file gateway for the task list.

    Layout (version 2):
        {"version": 2, "next_id": N, "tasks": [record, ...]}

    Each record keeps title and detail as separate fields. Older files that
    are a bare list of records, or whose records carry a single "rawText"
    field, are still readable.

    Writes go to a sibling .tmp file which is then os.replace()d over the
    target, so an interrupted save never leaves a half-written file.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    # ---- record codec ----

    @staticmethod
    def _task_to_record(task: Task) -> dict[str, Any]:
        return {
            "id": task.id,
            "title": task.title,
            "detail": task.detail,
            "priority": int(task.priority),
            "dueDate": task.due_date.isoformat(),
            "completed": task.completed,
            "createdAt": task.created_at,
        }

    @staticmethod
    def _record_to_task(rec: Any) -> Task:
        if not isinstance(rec, dict):
            raise ValueError(f"record is not an object: {rec!r}")

        task_id = rec.get("id")
        if isinstance(task_id, bool) or not isinstance(task_id, int) or task_id < 1:
            raise ValueError(f"bad id: {task_id!r}")

        if "rawText" in rec:
            raw = rec["rawText"]
            if not isinstance(raw, str):
                raise ValueError(f"bad rawText for id={task_id}")
            title, detail = split_raw_text(raw)
        else:
            title, detail = rec.get("title"), rec.get("detail", "")
            if not isinstance(title, str) or not isinstance(detail, str):
                raise ValueError(f"bad title/detail for id={task_id}")

        priority = rec.get("priority")
        if isinstance(priority, bool) or not isinstance(priority, int):
            raise ValueError(f"bad priority for id={task_id}")

        completed = rec.get("completed", False)
        if not isinstance(completed, bool):
            raise ValueError(f"bad completed flag for id={task_id}")

        created_at = rec.get("createdAt")
        if isinstance(created_at, bool) or not isinstance(created_at, int):
            raise ValueError(f"bad createdAt for id={task_id}")

        due_raw = rec.get("dueDate")
        if not isinstance(due_raw, str):
            raise ValueError(f"bad dueDate for id={task_id}")

        return Task.create(
            task_id=task_id,
            title=title,
            detail=detail,
            priority=Priority(priority),
            due_date=date.fromisoformat(due_raw),
            created_at=created_at,
            completed=completed,
        )

    # ---- public API ----

    def load(self) -> LoadedTasks:
        """
        Read the task list.

        Missing file -> empty result (first run). Anything present but not
        readable as a task list raises LoadError; the file is left as is.
        """
        if not self._path.exists():
            logger.info("No task file at %s; starting empty.", self._path)
            return LoadedTasks()

        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise LoadError(f"Cannot read task file: {e}", self._path) from e

        if isinstance(data, list):
            records, stored_next = data, 1
        elif isinstance(data, dict) and isinstance(data.get("tasks"), list):
            records = data["tasks"]
            stored_next = data.get("next_id", 1)
            if isinstance(stored_next, bool) or not isinstance(stored_next, int):
                raise LoadError("Task file has a bad next_id", self._path)
        else:
            raise LoadError("Task file has an unexpected layout", self._path)

        tasks: list[Task] = []
        for i, rec in enumerate(records):
            try:
                tasks.append(self._record_to_task(rec))
            except (ValueError, TypeError, ValidationError) as e:
                raise LoadError(f"Corrupt task record #{i}: {e}", self._path) from e

        logger.info("Loaded %d tasks from %s", len(tasks), self._path)
        return LoadedTasks(tasks=tasks, next_id=max(1, stored_next))

    def save(self, tasks: Iterable[Task], next_id: int) -> None:
        """Atomically replace the task file; OSError becomes SaveError."""
        records = [self._task_to_record(t) for t in tasks]
        payload = {"version": FORMAT_VERSION, "next_id": int(next_id), "tasks": records}
        tmp = self._path.with_name(self._path.name + ".tmp")

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), "utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise SaveError(f"Cannot write task file: {e}", self._path) from e

        logger.info("Saved %d tasks to %s", len(records), self._path)
