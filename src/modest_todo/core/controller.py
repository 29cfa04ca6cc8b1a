# src/modest_todo/core/controller.py

"""
Application controller.

Every user operation follows the same path:
    validate -> mutate TaskStore -> save via gateway -> re-render view

Failures never escape as exceptions: TaskError subclasses are turned into
an Outcome plus a presenter notice. A failed save does not roll back the
in-memory change; the user keeps the change for this session and is warned.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from enum import StrEnum
from typing import Any

from ..tasks.task_errors import LoadError, NotFoundError, SaveError, TaskError, ValidationError
from ..tasks.task_models import Priority, Task, is_past_due
from ..tasks.task_query import SortKey, StatusFilter, render
from ..tasks.task_store import TaskStore
from .ports import Presenter, TaskGateway

logger = logging.getLogger(__name__)

DEFAULT_DUE_DAYS = 7


@dataclass(frozen=True, slots=True)
class TaskRow:
    """Read-only view of a task handed to the presentation layer."""

    id: int
    title: str
    detail: str
    priority: Priority
    due_date: date
    completed: bool
    created_at: int

    @classmethod
    def from_task(cls, task: Task) -> TaskRow:
        return cls(
            id=task.id,
            title=task.title,
            detail=task.detail,
            priority=task.priority,
            due_date=task.due_date,
            completed=task.completed,
            created_at=task.created_at,
        )

    def is_overdue(self, today: date) -> bool:
        return is_past_due(self.due_date, self.completed, today)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "detail": self.detail,
            "priority": int(self.priority),
            "dueDate": self.due_date.isoformat(),
            "completed": self.completed,
            "createdAt": self.created_at,
        }


@dataclass(frozen=True, slots=True)
class ViewCriteria:
    status_filter: StatusFilter = StatusFilter.ALL
    search_text: str = ""
    sort_key: SortKey = SortKey.CREATED_NEWEST


class OutcomeStatus(StrEnum):
    OK = "ok"
    NO_SELECTION = "no_selection"
    NOT_FOUND = "not_found"
    INVALID = "invalid"
    CANCELLED = "cancelled"


@dataclass(slots=True)
class Outcome:
    status: OutcomeStatus
    task: TaskRow | None = None
    error: TaskError | None = None
    save_error: SaveError | None = None

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.OK


@dataclass
class TaskController:
    store: TaskStore
    gateway: TaskGateway
    presenter: Presenter
    criteria: ViewCriteria = field(default_factory=ViewCriteria)
    default_due_days: int = DEFAULT_DUE_DAYS
    today: Callable[[], date] = date.today

    # ---- view ----

    def list_view(
        self,
        status_filter: StatusFilter | str | None = None,
        search_text: str | None = None,
        sort_key: SortKey | str | None = None,
    ) -> list[TaskRow]:
        """Derive the ordered rows; None arguments use the current criteria."""
        c = self.criteria
        tasks = render(
            self.store.snapshot(),
            c.status_filter if status_filter is None else status_filter,
            c.search_text if search_text is None else search_text,
            c.sort_key if sort_key is None else sort_key,
        )
        return [TaskRow.from_task(t) for t in tasks]

    def set_view(
        self,
        *,
        status_filter: StatusFilter | str | None = None,
        search_text: str | None = None,
        sort_key: SortKey | str | None = None,
    ) -> list[TaskRow]:
        """Change the current criteria and re-render."""
        c = self.criteria
        self.criteria = replace(
            c,
            status_filter=c.status_filter if status_filter is None else StatusFilter.parse(status_filter),
            search_text=c.search_text if search_text is None else search_text,
            sort_key=c.sort_key if sort_key is None else SortKey.parse(sort_key),
        )
        return self.refresh()

    def refresh(self) -> list[TaskRow]:
        rows = self.list_view()
        self.presenter.show_view(rows)
        return rows

    def get_row(self, task_id: int) -> TaskRow | None:
        try:
            return TaskRow.from_task(self.store.get(task_id))
        except NotFoundError:
            return None

    def default_due_date(self) -> date:
        return self.today() + timedelta(days=self.default_due_days)

    # ---- operations ----

    def add_task(
        self,
        title: str,
        detail: str,
        priority: Priority | int | str,
        due_date: date | str | None = None,
    ) -> Outcome:
        if due_date is None:
            due_date = self.default_due_date()
        try:
            task = self.store.add(title, detail, priority, due_date)
        except ValidationError as e:
            return self._rejected(OutcomeStatus.INVALID, e)

        logger.info("Added task id=%s", task.id)
        return self._commit(TaskRow.from_task(task))

    def edit_task(
        self,
        task_id: int | None,
        title: str,
        detail: str,
        priority: Priority | int | str,
        due_date: date | str,
    ) -> Outcome:
        if task_id is None:
            return self._no_selection("edit")
        try:
            self.store.update(task_id, title, detail, priority, due_date)
        except NotFoundError as e:
            return self._rejected(OutcomeStatus.NOT_FOUND, e)
        except ValidationError as e:
            return self._rejected(OutcomeStatus.INVALID, e)

        logger.info("Edited task id=%s", task_id)
        return self._commit(TaskRow.from_task(self.store.get(task_id)))

    def toggle_task(self, task_id: int | None) -> Outcome:
        if task_id is None:
            return self._no_selection("toggle its completion status")
        try:
            self.store.toggle(task_id)
        except NotFoundError as e:
            return self._rejected(OutcomeStatus.NOT_FOUND, e)

        logger.info("Toggled task id=%s", task_id)
        return self._commit(TaskRow.from_task(self.store.get(task_id)))

    def delete_task(self, task_id: int | None) -> Outcome:
        if task_id is None:
            return self._no_selection("delete")
        try:
            row = TaskRow.from_task(self.store.get(task_id))
        except NotFoundError as e:
            return self._rejected(OutcomeStatus.NOT_FOUND, e)

        if not self.presenter.confirm(f"Are you sure you want to delete the task: '{row.title}'?"):
            logger.debug("Delete of id=%s declined", task_id)
            return Outcome(OutcomeStatus.CANCELLED, task=row)

        self.store.remove(task_id)
        logger.info("Deleted task id=%s", task_id)
        return self._commit(row)

    # ---- persistence ----

    def flush(self) -> SaveError | None:
        """Save the whole store; returns the failure instead of raising."""
        try:
            self.gateway.save(self.store.snapshot(), self.store.next_id)
        except SaveError as e:
            logger.warning("Saving tasks failed: %s", e, exc_info=True)
            return e
        return None

    def report_load_error(self, err: LoadError) -> None:
        logger.error("Error loading tasks from %s: %s", err.path, err, exc_info=err)
        self.presenter.notify(
            "error",
            "Error loading existing tasks. Starting with an empty list; "
            "the old file is kept until the next save.",
        )

    # ---- helpers ----

    def _commit(self, row: TaskRow) -> Outcome:
        save_error = self.flush()
        if save_error is not None:
            self.presenter.notify(
                "warning", "Error saving tasks. The change is kept for this session only."
            )
        self.refresh()
        return Outcome(OutcomeStatus.OK, task=row, save_error=save_error)

    def _rejected(self, status: OutcomeStatus, err: TaskError) -> Outcome:
        logger.info("Operation rejected (%s): %s", status.value, err)
        level = "warning" if status is OutcomeStatus.INVALID else "info"
        self.presenter.notify(level, str(err))
        return Outcome(status, error=err)

    def _no_selection(self, action: str) -> Outcome:
        self.presenter.notify("info", f"Please select a task to {action}.")
        return Outcome(OutcomeStatus.NO_SELECTION)
