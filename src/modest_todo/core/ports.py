# src/modest_todo/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The controller depends on Protocols instead of concrete implementations.
This keeps the presentation layer and the storage backend swappable and
makes testing easier.
"""

from typing import TYPE_CHECKING, Iterable, Literal, Protocol

if TYPE_CHECKING:
    from ..tasks.task_file import LoadedTasks
    from ..tasks.task_models import Task
    from .controller import TaskRow

NoticeLevel = Literal["info", "warning", "error"]


class Presenter(Protocol):
    """
    Presentation-side port: what the core needs from a UI.

    The core never formats widgets; it hands over rows and short notices
    and asks yes/no questions (delete confirmation).
    """

    def show_view(self, rows: list[TaskRow]) -> None: ...
    def notify(self, level: NoticeLevel, message: str) -> None: ...
    def confirm(self, prompt: str) -> bool: ...


class TaskGateway(Protocol):
    """Durable storage for the whole task list."""

    def load(self) -> LoadedTasks: ...
    def save(self, tasks: Iterable[Task], next_id: int) -> None: ...
