# src/modest_todo/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from typing import TYPE_CHECKING

from ..cli.commands import registry as command_registry
from ..core.controller import TaskRow
from ..core.ports import NoticeLevel

if TYPE_CHECKING:
    from ..core.state import AppState

logger = logging.getLogger(__name__)

DISPLAY_DATE_FORMAT = "%b %d, %Y"
TITLE_WIDTH = 48

_NOTICE_PREFIX: dict[str, str] = {
    "info": "[INFO]",
    "warning": "[WARN]",
    "error": "[ERROR]",
}


def format_row(row: TaskRow, *, today: date, selected: bool = False) -> str:
    mark = ">" if selected else " "
    done = "x" if row.completed else " "
    due = row.due_date.strftime(DISPLAY_DATE_FORMAT)
    overdue = "!" if row.is_overdue(today) else " "
    title = row.title if len(row.title) <= TITLE_WIDTH else row.title[: TITLE_WIDTH - 3] + "..."
    return f"{mark}{row.id:>4} [{done}] {row.priority.label:<6} {due}{overdue}  {title}"


class ConsolePresenter:
    """
    Plain stdout/stdin Presenter.

    Once bound to an AppState, every rendered view is pushed into it so the
    selection follows the table.
    """

    def __init__(
        self,
        *,
        input_fn: Callable[[str], str] = input,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._state: AppState | None = None
        self._input = input_fn
        self._today = today

    def bind(self, state: AppState) -> None:
        self._state = state

    def show_view(self, rows: list[TaskRow]) -> None:
        selected = None
        if self._state is not None:
            self._state.update_rows(rows)
            selected = self._state.selected_id

        if not rows:
            print("  (no tasks)")
            return

        today = self._today()
        print(f"  {'ID':>4} [ ] {'Prio':<6} {'Due':<13}  Task")
        for row in rows:
            print(format_row(row, today=today, selected=row.id == selected))

    def notify(self, level: NoticeLevel, message: str) -> None:
        print(f"{_NOTICE_PREFIX.get(level, '[INFO]')} {message}")

    def confirm(self, prompt: str) -> bool:
        try:
            answer = self._input(f"{prompt} [y/N] ")
        except (EOFError, KeyboardInterrupt):
            print()
            return False
        return answer.strip().lower() in ("y", "yes")


def run_console_loop(state: AppState, *, input_fn: Callable[[str], str] = input) -> None:
    logger.info("Console connector started.")
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "modest-todo"))
    print(f"{app_name}: type /help for commands, /exit to quit.\n")

    state.controller.refresh()

    while True:
        try:
            user_input = input_fn("todo> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            print()
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        if not user_input.startswith("/"):
            # Bare text is a quick search.
            user_input = f"/search {user_input}"

        try:
            cmd_response = command_registry.handle(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            cmd_response = "Internal error while handling a command."

        if cmd_response:
            print(cmd_response)

    logger.info("Console connector finished.")
