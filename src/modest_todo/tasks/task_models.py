# src/modest_todo/tasks/task_models.py

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from enum import IntEnum

from .task_errors import ValidationError

# Reserved separator between title and detail inside raw_text.
TITLE_DETAIL_DELIMITER = "\n###\n"

_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


class Priority(IntEnum):
    """
    Task priority.

    Stored as a small integer (1=Low, 2=Medium, 3=High) so that plain
    integer comparison gives High > Medium > Low.
    """

    LOW = 1
    MEDIUM = 2
    HIGH = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def parse(cls, raw: Priority | int | str | None) -> Priority:
        """Accept a member, 1..3, or a label / its first letter (any case)."""
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, bool) or raw is None:
            raise ValidationError(f"Invalid priority: {raw!r}")
        if isinstance(raw, int):
            try:
                return cls(raw)
            except ValueError:
                raise ValidationError(f"Invalid priority: {raw!r}") from None

        text = str(raw).strip().lower()
        if text.isascii() and text.isdigit():
            return cls.parse(int(text))
        for member in cls:
            name = member.name.lower()
            if text in (name, name[0]):
                return member
        raise ValidationError(f"Invalid priority: {raw!r}")


def encode_raw_text(title: str, detail: str = "") -> str:
    if not detail:
        return title
    return f"{title}{TITLE_DETAIL_DELIMITER}{detail}"


def split_raw_text(raw: str) -> tuple[str, str]:
    """Return (title, detail); detail is empty when the delimiter is absent."""
    title, sep, detail = raw.partition(TITLE_DETAIL_DELIMITER)
    if not sep:
        return raw, ""
    return title, detail


def parse_due_date(raw: date | str | None) -> date:
    """
    Parse a strict YYYY-MM-DD due date and check it against the calendar.

    Incomplete input (placeholders, missing parts) and impossible dates
    such as 2025-02-30 are rejected.
    """
    if isinstance(raw, date):
        return raw
    if raw is None:
        raise ValidationError("Due date is required (YYYY-MM-DD).")

    text = str(raw).strip()
    if not text:
        raise ValidationError("Due date is required (YYYY-MM-DD).")
    m = _ISO_DATE_RE.match(text)
    if not m:
        raise ValidationError(f"Please enter a complete date in YYYY-MM-DD format: {text!r}")

    year, month, day = (int(g) for g in m.groups())
    try:
        return date(year, month, day)
    except ValueError:
        raise ValidationError(f"Not a valid calendar date: {text}") from None


def clean_title(title: str | None) -> str:
    text = (title or "").strip()
    if not text:
        raise ValidationError("Task name cannot be empty.")
    if TITLE_DETAIL_DELIMITER in text:
        raise ValidationError("Task name contains a reserved character sequence.")
    return text


def is_past_due(due_date: date, completed: bool, today: date) -> bool:
    """Incomplete and due strictly before today."""
    return not completed and due_date < today


@dataclass(slots=True)
class Task:
    """
    A single to-do item.

    id and created_at are fixed at construction; the remaining fields change
    only through apply_edit() and toggle().
    """

    _id: int
    raw_text: str
    priority: Priority
    due_date: date
    _created_at: int
    completed: bool = False

    @classmethod
    def create(
        cls,
        *,
        task_id: int,
        title: str,
        detail: str,
        priority: Priority | int | str,
        due_date: date | str,
        created_at: int,
        completed: bool = False,
    ) -> Task:
        title = clean_title(title)
        return cls(
            _id=task_id,
            raw_text=encode_raw_text(title, (detail or "").strip()),
            priority=Priority.parse(priority),
            due_date=parse_due_date(due_date),
            _created_at=created_at,
            completed=completed,
        )

    @property
    def id(self) -> int:
        return self._id

    @property
    def created_at(self) -> int:
        return self._created_at

    @property
    def title(self) -> str:
        return split_raw_text(self.raw_text)[0]

    @property
    def detail(self) -> str:
        return split_raw_text(self.raw_text)[1]

    def apply_edit(self, *, title: str, detail: str, priority: Priority, due_date: date) -> None:
        self.raw_text = encode_raw_text(title, detail)
        self.priority = priority
        self.due_date = due_date

    def toggle(self) -> None:
        self.completed = not self.completed

    def is_overdue(self, today: date) -> bool:
        return is_past_due(self.due_date, self.completed, today)
