# tests/conftest.py

from __future__ import annotations

from datetime import date
from pathlib import Path
from types import SimpleNamespace

import pytest

from modest_todo.core.controller import TaskController
from modest_todo.core.state import AppState
from modest_todo.tasks.task_file import TaskFile
from modest_todo.tasks.task_store import TaskStore

from .fakes import FakePresenter, StepClock

TODAY = date(2025, 5, 15)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="modest-todo-test",
        log_level="WARNING",
        log_to_file=False,
        data_dir=tmp_path / "data",
        tasks_path=tmp_path / "data" / "tasks.json",
        default_sort="created",
        default_filter="all",
        default_due_days=7,
    )


@pytest.fixture()
def clock() -> StepClock:
    return StepClock()


@pytest.fixture()
def store(clock: StepClock) -> TaskStore:
    return TaskStore(clock=clock)


@pytest.fixture()
def task_file(settings: SimpleNamespace) -> TaskFile:
    return TaskFile(settings.tasks_path)


@pytest.fixture()
def presenter() -> FakePresenter:
    return FakePresenter()


@pytest.fixture()
def controller(store: TaskStore, task_file: TaskFile, presenter: FakePresenter) -> TaskController:
    """
    Controller wired with the real store and a real file gateway in tmp_path.

    The presenter is a fake so tests can assert on views and notices.
    """
    return TaskController(
        store=store,
        gateway=task_file,
        presenter=presenter,
        today=lambda: TODAY,
    )


@pytest.fixture()
def state(
    settings: SimpleNamespace, controller: TaskController, presenter: FakePresenter
) -> AppState:
    app_state = AppState(settings=settings, controller=controller)
    presenter.bind(app_state)
    return app_state
