# src/modest_todo/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field

from .controller import TaskController, TaskRow


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    controller: TaskController

    # Last rendered rows and the row commands act on when no id is given.
    rows: list[TaskRow] = field(default_factory=list)
    selected_id: int | None = None

    def update_rows(self, rows: list[TaskRow]) -> None:
        """Keep the selection if still visible, else select the first row."""
        self.rows = list(rows)
        visible = {r.id for r in self.rows}
        if self.selected_id not in visible:
            self.selected_id = self.rows[0].id if self.rows else None
