# src/modest_todo/tasks/task_errors.py

"""
Error taxonomy for the task subsystem.

Store and file gateway raise these; the controller turns them into outcomes
so nothing escapes to the presentation layer.
"""

from __future__ import annotations

from pathlib import Path


class TaskError(Exception):
    """Base class for every expected task failure."""


class ValidationError(TaskError):
    """Bad user input: empty title, unparseable due date, unknown priority."""


class NotFoundError(TaskError):
    """Referenced task id is not in the store (usually a stale selection)."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class LoadError(TaskError):
    """Persisted data exists but cannot be read back."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class SaveError(TaskError):
    """Durable write failed; in-memory state is still authoritative."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None
