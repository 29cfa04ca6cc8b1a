# src/modest_todo/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- restores the task list from disk (a corrupt file degrades to an empty list),
- wires TaskStore, TaskFile, the presenter and the controller into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..connectors.console_connector import ConsolePresenter
from ..core.controller import TaskController, ViewCriteria
from ..core.ports import Presenter
from ..core.state import AppState
from ..tasks.task_errors import LoadError
from ..tasks.task_file import TaskFile
from ..tasks.task_query import SortKey, StatusFilter
from ..tasks.task_store import Clock, TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)


def restore_store(gateway: TaskFile, *, clock: Clock | None = None) -> tuple[TaskStore, LoadError | None]:
    """
    Build the TaskStore from persisted data.

    Absent file -> empty store, no error. Unreadable/corrupt data -> empty
    store plus the LoadError, so the caller can report it once. The bad file
    is not touched here; it is only replaced by the next explicit save.
    """
    try:
        loaded = gateway.load()
        store = TaskStore.from_tasks(loaded.tasks, next_id=loaded.next_id, clock=clock)
    except LoadError as e:
        return TaskStore(clock=clock), e
    return store, None


def create_initial_state(*, settings=None, presenter: Presenter | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    gateway = TaskFile(settings.tasks_path)
    store, load_error = restore_store(gateway)

    if presenter is None:
        presenter = ConsolePresenter()

    controller = TaskController(
        store=store,
        gateway=gateway,
        presenter=presenter,
        criteria=ViewCriteria(
            status_filter=StatusFilter.parse(getattr(settings, "default_filter", None)),
            sort_key=SortKey.parse(getattr(settings, "default_sort", None)),
        ),
        default_due_days=int(getattr(settings, "default_due_days", 7)),
    )
    state = AppState(settings=settings, controller=controller)

    bind = getattr(presenter, "bind", None)
    if callable(bind):
        bind(state)

    if load_error is not None:
        controller.report_load_error(load_error)

    logger.info("Task list ready: %d tasks, next id %d", len(store), store.next_id)
    return state
