# src/modest_todo/cli/commands.py

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from ..core.controller import OutcomeStatus, TaskRow
from ..core.state import AppState
from ..tasks.task_models import Priority
from ..tasks.task_query import SortKey, StatusFilter

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)

FIELD_SEP = "|"
DEFAULT_NEW_PRIORITY = Priority.HIGH
_ID_RE = re.compile(r"^#?(\d+)$", re.ASCII)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- argument helpers ----


def parse_task_id(token: str | None) -> int | None:
    if not token:
        return None
    m = _ID_RE.match(token)
    return int(m.group(1)) if m else None


def target_id(state: AppState, args: list[str]) -> tuple[int | None, str | None]:
    """
    Task id from the first argument, or the selection when none is given.
    Returns (id, error); error is set when an argument was given but is not an id.
    """
    if not args:
        return state.selected_id, None
    task_id = parse_task_id(args[0])
    if task_id is None:
        return None, f"Invalid task id: {args[0]!r}."
    return task_id, None


def split_fields(args: list[str]) -> list[str]:
    """'/add a b | c | high' -> ['a b', 'c', 'high']"""
    return [p.strip() for p in " ".join(args).split(FIELD_SEP)]


def _field(fields: list[str], index: int) -> str:
    return fields[index] if index < len(fields) else ""


def format_detail(row: TaskRow) -> str:
    lines = [
        f"#{row.id} {row.title}",
        f"  Priority: {row.priority.label}",
        f"  Due: {row.due_date.isoformat()}",
        f"  Completed: {'Yes' if row.completed else 'No'}",
    ]
    if row.detail:
        lines.append("  Details:")
        lines.extend(f"    {line}" for line in row.detail.splitlines())
    return "\n".join(lines)


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    state.controller.refresh()
    c = state.controller.criteria
    search = f", search={c.search_text!r}" if c.search_text.strip() else ""
    return f"(filter={c.status_filter.value}, sort={c.sort_key.value}{search})"


def cmd_show(state: AppState, args: list[str]) -> str:
    task_id, error = target_id(state, args)
    if error:
        return error
    if task_id is None:
        return "Please select a task to show."
    row = state.controller.get_row(task_id)
    if row is None:
        return f"Task {task_id} not found."
    return format_detail(row)


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add title | detail | priority | YYYY-MM-DD
    Only the title is required; priority defaults to High and the due date
    to the configured offset from today.
    """
    fields = split_fields(args)
    priority = _field(fields, 2) or DEFAULT_NEW_PRIORITY
    due = _field(fields, 3) or None

    outcome = state.controller.add_task(_field(fields, 0), _field(fields, 1), priority, due)
    if outcome.ok and outcome.task is not None:
        state.selected_id = outcome.task.id
        return f"Added task #{outcome.task.id}."
    return ""


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit [#id] title | detail | priority | YYYY-MM-DD
    Empty fields keep their current value; use "-" to clear the detail.
    """
    task_id: int | None = state.selected_id
    if args and args[0].startswith("#"):
        task_id = parse_task_id(args[0])
        if task_id is None:
            return f"Invalid task id: {args[0]!r}."
        args = args[1:]

    current = state.controller.get_row(task_id) if task_id is not None else None
    fields = split_fields(args)

    if current is None:
        # Let the controller report the missing selection / stale id.
        state.controller.edit_task(
            task_id, _field(fields, 0), _field(fields, 1), _field(fields, 2), _field(fields, 3)
        )
        return ""

    detail = _field(fields, 1)
    if detail == "-":
        detail = ""
    elif not detail:
        detail = current.detail

    outcome = state.controller.edit_task(
        current.id,
        _field(fields, 0) or current.title,
        detail,
        _field(fields, 2) or current.priority,
        _field(fields, 3) or current.due_date,
    )
    return f"Updated task #{current.id}." if outcome.ok else ""


def cmd_done(state: AppState, args: list[str]) -> str:
    task_id, error = target_id(state, args)
    if error:
        return error
    outcome = state.controller.toggle_task(task_id)
    if outcome.ok and outcome.task is not None:
        status = "completed" if outcome.task.completed else "not completed"
        return f"Task #{outcome.task.id} marked {status}."
    return ""


def cmd_delete(state: AppState, args: list[str]) -> str:
    task_id, error = target_id(state, args)
    if error:
        return error
    outcome = state.controller.delete_task(task_id)
    if outcome.ok and outcome.task is not None:
        return f"Deleted task #{outcome.task.id}."
    if outcome.status is OutcomeStatus.CANCELLED:
        return "Delete cancelled."
    return ""


def cmd_select(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /select <id>"
    task_id = parse_task_id(args[0])
    if task_id is None:
        return f"Invalid task id: {args[0]!r}."
    if all(r.id != task_id for r in state.rows):
        return f"Task {task_id} is not in the current view."
    state.selected_id = task_id
    return f"Selected task #{task_id}."


def cmd_filter(state: AppState, args: list[str]) -> str:
    if not args:
        options = ", ".join(f.value for f in StatusFilter)
        return f"Filter is {state.controller.criteria.status_filter.value}. Options: {options}."
    state.controller.set_view(status_filter=StatusFilter.parse(args[0]))
    return ""


def cmd_sort(state: AppState, args: list[str]) -> str:
    if not args:
        options = ", ".join(k.value for k in SortKey)
        return f"Sort is {state.controller.criteria.sort_key.value}. Options: {options}."
    state.controller.set_view(sort_key=SortKey.parse(args[0]))
    return ""


def cmd_search(state: AppState, args: list[str]) -> str:
    state.controller.set_view(search_text=" ".join(args))
    return ""


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Redraw the task list.", aliases=["ls"])
registry.register("show", cmd_show, help_text="Show task details: /show [id].")
registry.register(
    "add",
    cmd_add,
    help_text="Add a task: /add title | detail | high/medium/low | YYYY-MM-DD.",
    aliases=["new"],
)
registry.register(
    "edit",
    cmd_edit,
    help_text="Edit a task: /edit [#id] title | detail | priority | YYYY-MM-DD (blank keeps).",
)
registry.register("done", cmd_done, help_text="Toggle completion: /done [id].", aliases=["toggle"])
registry.register("del", cmd_delete, help_text="Delete a task (asks first): /del [id].", aliases=["rm"])
registry.register("select", cmd_select, help_text="Select the task other commands act on.")
registry.register("filter", cmd_filter, help_text="Status filter: /filter all | incomplete | completed.")
registry.register("sort", cmd_sort, help_text="Sort: /sort created | due | due-far | priority | priority-low.")
registry.register("search", cmd_search, help_text="Search title/details: /search [text] (empty clears).")
