# src/modest_todo/tasks/task_query.py

"""
Query pipeline: derive the display-ordered view from a store snapshot.

render() is pure. It filters by status and search text, then applies one
of five composite sort keys. Every key ends in created_at and Python's sort
is stable, so ties fall back to snapshot (insertion) order and the output
is fully determined.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from enum import StrEnum
from typing import Any

from .task_models import Task

SortKeyFn = Callable[[Task], tuple[Any, ...]]


class StatusFilter(StrEnum):
    ALL = "all"
    INCOMPLETE = "incomplete"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, raw: StatusFilter | str | None) -> StatusFilter:
        if isinstance(raw, cls):
            return raw
        text = (raw or "").strip().lower()
        return _FILTER_ALIASES.get(text, cls.ALL)

    def matches(self, task: Task) -> bool:
        if self is StatusFilter.INCOMPLETE:
            return not task.completed
        if self is StatusFilter.COMPLETED:
            return task.completed
        return True


_FILTER_ALIASES: dict[str, StatusFilter] = {
    "all": StatusFilter.ALL,
    "a": StatusFilter.ALL,
    "incomplete": StatusFilter.INCOMPLETE,
    "open": StatusFilter.INCOMPLETE,
    "todo": StatusFilter.INCOMPLETE,
    "i": StatusFilter.INCOMPLETE,
    "completed": StatusFilter.COMPLETED,
    "done": StatusFilter.COMPLETED,
    "c": StatusFilter.COMPLETED,
}


class SortKey(StrEnum):
    CREATED_NEWEST = "created"
    DUE_SOONEST = "due"
    DUE_FARTHEST = "due-far"
    PRIORITY_HIGH_FIRST = "priority"
    PRIORITY_LOW_FIRST = "priority-low"

    @classmethod
    def parse(cls, raw: SortKey | str | None) -> SortKey:
        """Unknown or empty input falls back to CREATED_NEWEST."""
        if isinstance(raw, cls):
            return raw
        text = (raw or "").strip().lower().replace("_", "-")
        return _SORT_ALIASES.get(text, cls.CREATED_NEWEST)


_SORT_ALIASES: dict[str, SortKey] = {
    "created": SortKey.CREATED_NEWEST,
    "newest": SortKey.CREATED_NEWEST,
    "due": SortKey.DUE_SOONEST,
    "due-soonest": SortKey.DUE_SOONEST,
    "due-far": SortKey.DUE_FARTHEST,
    "due-farthest": SortKey.DUE_FARTHEST,
    "priority": SortKey.PRIORITY_HIGH_FIRST,
    "priority-high": SortKey.PRIORITY_HIGH_FIRST,
    "priority-low": SortKey.PRIORITY_LOW_FIRST,
}


# Descending parts are negated so one ascending stable sort handles all keys.
_SORT_KEYS: dict[SortKey, SortKeyFn] = {
    SortKey.CREATED_NEWEST: lambda t: (-t.created_at,),
    SortKey.DUE_SOONEST: lambda t: (t.due_date.toordinal(), -t.priority, t.created_at),
    SortKey.DUE_FARTHEST: lambda t: (-t.due_date.toordinal(), -t.priority, t.created_at),
    SortKey.PRIORITY_HIGH_FIRST: lambda t: (-t.priority, t.due_date.toordinal(), t.created_at),
    SortKey.PRIORITY_LOW_FIRST: lambda t: (int(t.priority), t.due_date.toordinal(), t.created_at),
}


def normalize_search(text: str | None) -> str:
    return (text or "").strip().lower()


def matches_search(task: Task, needle: str) -> bool:
    """needle must already be normalized; empty always matches."""
    if not needle:
        return True
    return needle in (task.title + task.detail).lower()


def render(
    snapshot: Iterable[Task],
    status_filter: StatusFilter | str | None = StatusFilter.ALL,
    search_text: str | None = "",
    sort_key: SortKey | str | None = SortKey.CREATED_NEWEST,
) -> list[Task]:
    status = StatusFilter.parse(status_filter)
    needle = normalize_search(search_text)
    key = _SORT_KEYS[SortKey.parse(sort_key)]

    filtered = [t for t in snapshot if status.matches(t) and matches_search(t, needle)]
    filtered.sort(key=key)
    return filtered
