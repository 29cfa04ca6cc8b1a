# tests/test_task_query.py

from __future__ import annotations

import pytest

from modest_todo.tasks.task_models import Task
from modest_todo.tasks.task_query import SortKey, StatusFilter, render
from modest_todo.tasks.task_store import TaskStore

from .fakes import StepClock


def _ids(tasks: list[Task]) -> list[int]:
    return [t.id for t in tasks]


@pytest.fixture()
def sample(store: TaskStore) -> TaskStore:
    """
    id title          prio    due         done
    1  Buy milk       medium  2025-06-01
    2  Pay rent       high    2025-05-01
    3  Walk dog       low     2025-05-01  yes
    4  Call plumber   high    2025-06-01
    """
    store.add("Buy milk", "Semi-skimmed", "medium", "2025-06-01")
    store.add("Pay rent", "Landlord: Ms. MILKOVIC", "high", "2025-05-01")
    store.add("Walk dog", "", "low", "2025-05-01")
    store.add("Call plumber", "kitchen sink", "high", "2025-06-01")
    store.toggle(3)
    return store


def test_status_filter(sample: TaskStore) -> None:
    snap = sample.snapshot()
    assert sorted(_ids(render(snap, StatusFilter.ALL))) == [1, 2, 3, 4]
    assert sorted(_ids(render(snap, StatusFilter.INCOMPLETE))) == [1, 2, 4]
    assert _ids(render(snap, StatusFilter.COMPLETED)) == [3]


def test_search_is_trimmed_and_case_insensitive(sample: TaskStore) -> None:
    snap = sample.snapshot()
    assert sorted(_ids(render(snap, search_text="  MiLk "))) == [1, 2]
    assert _ids(render(snap, search_text="sink")) == [4]
    assert _ids(render(snap, search_text="nothing like this")) == []
    assert len(render(snap, search_text="   ")) == 4


def test_search_spans_title_and_detail_concatenation(store: TaskStore) -> None:
    store.add("ab", "cd", "low", "2025-01-01")
    assert _ids(render(store.snapshot(), search_text="bc")) == [1]


def test_filter_and_search_combine(sample: TaskStore) -> None:
    snap = sample.snapshot()
    assert _ids(render(snap, StatusFilter.COMPLETED, "milk")) == []
    assert _ids(render(snap, StatusFilter.INCOMPLETE, "dog")) == []


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        (SortKey.CREATED_NEWEST, [4, 3, 2, 1]),
        # due asc, then priority desc, then created asc
        (SortKey.DUE_SOONEST, [2, 3, 4, 1]),
        (SortKey.DUE_FARTHEST, [4, 1, 2, 3]),
        # priority desc, then due asc
        (SortKey.PRIORITY_HIGH_FIRST, [2, 4, 1, 3]),
        (SortKey.PRIORITY_LOW_FIRST, [3, 1, 2, 4]),
    ],
)
def test_sort_keys(sample: TaskStore, key: SortKey, expected: list[int]) -> None:
    assert _ids(render(sample.snapshot(), sort_key=key)) == expected


def test_sort_accepts_string_values_and_falls_back(sample: TaskStore) -> None:
    snap = sample.snapshot()
    assert _ids(render(snap, sort_key="due")) == [2, 3, 4, 1]
    assert _ids(render(snap, sort_key="no-such-sort")) == [4, 3, 2, 1]
    assert _ids(render(snap, sort_key=None)) == [4, 3, 2, 1]
    assert SortKey.parse("PRIORITY_LOW") is SortKey.PRIORITY_LOW_FIRST
    assert StatusFilter.parse("done") is StatusFilter.COMPLETED
    assert StatusFilter.parse("bogus") is StatusFilter.ALL


@pytest.mark.parametrize("key", list(SortKey))
def test_full_ties_keep_insertion_order(key: SortKey) -> None:
    # Same created_at, same due date, same priority: only insertion order differs.
    store = TaskStore(clock=StepClock(step=0))
    for title in ("first", "second", "third"):
        store.add(title, "", "medium", "2025-06-01")
    assert _ids(render(store.snapshot(), sort_key=key)) == [1, 2, 3]


def test_render_is_deterministic(sample: TaskStore) -> None:
    snap = sample.snapshot()
    for key in SortKey:
        assert render(snap, sort_key=key) == render(snap, sort_key=key)


def test_render_does_not_touch_store(sample: TaskStore) -> None:
    before = sample.snapshot()
    snap = sample.snapshot()
    for key in SortKey:
        for status in StatusFilter:
            render(snap, status, "a", key)
    assert snap == before
    assert sample.snapshot() == before


def test_empty_snapshot() -> None:
    assert render((), StatusFilter.COMPLETED, "x", SortKey.DUE_SOONEST) == []
