# tests/test_commands.py

from __future__ import annotations

from modest_todo.cli.commands import CommandRegistry, parse_task_id, registry, split_fields
from modest_todo.core.state import AppState
from modest_todo.tasks.task_models import Priority
from modest_todo.tasks.task_query import SortKey, StatusFilter

from .fakes import FakePresenter


def test_command_registry_routes_by_name_and_alias(state: AppState) -> None:
    reg = CommandRegistry()
    seen: list[list[str]] = []

    def handler(state, args):
        seen.append(args)
        return "ok"

    reg.register("ping", handler, "ping", aliases=["p"])

    assert reg.handle(state, "/ping x y") == "ok"
    assert reg.handle(state, "/P z") == "ok"
    assert seen == [["x", "y"], ["z"]]
    assert "/ping - ping" in reg.build_help()


def test_command_registry_unknown_and_non_command(state: AppState) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_argument_helpers() -> None:
    assert parse_task_id("#12") == 12
    assert parse_task_id("7") == 7
    assert parse_task_id("x7") is None
    assert parse_task_id(None) is None
    assert parse_task_id("²") is None
    assert split_fields(["Buy", "milk", "|", "two", "litres|high"]) == ["Buy milk", "two litres", "high"]


def test_add_select_and_show(state: AppState) -> None:
    reply = registry.handle(state, "/add Buy milk | semi-skimmed | medium | 2025-06-01")
    assert reply == "Added task #1."
    registry.handle(state, "/add Walk dog")

    task = state.controller.store.get(2)
    assert task.priority is Priority.HIGH
    assert task.detail == ""

    assert state.selected_id == 2
    assert registry.handle(state, "/select 1") == "Selected task #1."
    shown = registry.handle(state, "/show") or ""
    assert "#1 Buy milk" in shown
    assert "semi-skimmed" in shown


def test_add_with_bad_date_reports_and_adds_nothing(state: AppState, presenter: FakePresenter) -> None:
    assert registry.handle(state, "/add Pay rent | | high | 2025-02-30") == ""
    assert len(state.controller.store) == 0
    assert presenter.levels() == ["warning"]


def test_edit_keeps_blank_fields(state: AppState) -> None:
    registry.handle(state, "/add Buy milk | semi-skimmed | medium | 2025-06-01")

    assert registry.handle(state, "/edit #1 | | low |") == "Updated task #1."
    task = state.controller.store.get(1)
    assert (task.title, task.detail, task.priority) == ("Buy milk", "semi-skimmed", Priority.LOW)

    registry.handle(state, "/edit Buy oat milk | - ")
    task = state.controller.store.get(1)
    assert (task.title, task.detail) == ("Buy oat milk", "")


def test_done_and_delete_use_selection(state: AppState, presenter: FakePresenter) -> None:
    registry.handle(state, "/add Buy milk")
    assert registry.handle(state, "/done") == "Task #1 marked completed."
    assert state.controller.store.get(1).completed is True

    presenter.confirm_answer = False
    assert registry.handle(state, "/del") == "Delete cancelled."
    presenter.confirm_answer = True
    assert registry.handle(state, "/del 1") == "Deleted task #1."

    assert state.selected_id is None
    assert registry.handle(state, "/done") == ""
    assert presenter.notices[-1] == ("info", "Please select a task to toggle its completion status.")


def test_view_commands_change_criteria(state: AppState) -> None:
    registry.handle(state, "/add Buy milk | | medium | 2025-06-01")
    registry.handle(state, "/add Pay rent | | high | 2025-05-01")
    registry.handle(state, "/done 2")

    registry.handle(state, "/filter incomplete")
    registry.handle(state, "/sort due")
    assert state.controller.criteria.status_filter is StatusFilter.INCOMPLETE
    assert state.controller.criteria.sort_key is SortKey.DUE_SOONEST
    assert [r.id for r in state.rows] == [1]

    registry.handle(state, "/filter all")
    registry.handle(state, "/search RENT")
    assert [r.id for r in state.rows] == [2]
    assert state.selected_id == 2

    registry.handle(state, "/search")
    assert sorted(r.id for r in state.rows) == [1, 2]
    assert "sort=due" in (registry.handle(state, "/list") or "")


def test_malformed_id_is_reported_not_treated_as_no_selection(
    state: AppState, presenter: FakePresenter
) -> None:
    registry.handle(state, "/add Buy milk")

    assert registry.handle(state, "/done abc") == "Invalid task id: 'abc'."
    assert registry.handle(state, "/del abc") == "Invalid task id: 'abc'."
    assert registry.handle(state, "/show abc") == "Invalid task id: 'abc'."
    assert registry.handle(state, "/edit #abc New title") == "Invalid task id: '#abc'."
    assert registry.handle(state, "/select x1") == "Invalid task id: 'x1'."

    task = state.controller.store.get(1)
    assert (task.title, task.completed) == ("Buy milk", False)
    assert presenter.notices == []
    assert presenter.prompts == []


def test_add_with_non_ascii_digit_priority_is_rejected(
    state: AppState, presenter: FakePresenter
) -> None:
    assert registry.handle(state, "/add Buy milk | | ² | 2025-06-01") == ""
    assert len(state.controller.store) == 0
    assert presenter.levels() == ["warning"]
