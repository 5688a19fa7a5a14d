# tests/test_sort_engine.py

from __future__ import annotations

from collections import Counter

import pytest

from tasklist_client.tasks.sort_engine import prio_rank, sort_tasks, status_rank
from tasklist_client.tasks.task_models import SortMode, Task

from .fakes import make_record


def _tasks(*records: dict) -> list[Task]:
    return [Task.from_api(r) for r in records]


def _ids(tasks: list[Task]) -> list[int]:
    return [t.id for t in tasks]


@pytest.fixture()
def mixed() -> list[Task]:
    return _tasks(
        make_record(1, status="done", priority="low", due="2024-03-01", created_at="2024-01-05T00:00:00Z"),
        make_record(2, status="todo", priority="high", due=None, created_at="2024-01-01T00:00:00Z"),
        make_record(3, status="blocked", priority="medium", due="2024-02-01", created_at="2024-01-03T00:00:00Z"),
        make_record(4, status="todo", priority="urgent", due="2024-03-01", created_at="2024-01-04T00:00:00Z"),
        make_record(5, status="weird", priority="high", due=None, created_at="2024-01-02T00:00:00Z"),
    )


@pytest.mark.parametrize("mode", [*SortMode, "bogus", None])
def test_sort_returns_new_permutation_and_keeps_input(mixed: list[Task], mode) -> None:
    before = list(mixed)
    out = sort_tasks(mixed, mode)

    assert out is not mixed
    assert Counter(_ids(out)) == Counter(_ids(mixed))
    assert mixed == before


def test_rank_tables_default_to_zero() -> None:
    assert [prio_rank(p) for p in ("high", "medium", "low", "urgent", None)] == [3, 2, 1, 0, 0]
    assert [status_rank(s) for s in ("todo", "doing", "blocked", "done", "", None)] == [1, 2, 3, 4, 0, 0]


def test_due_asc_puts_missing_due_last_and_keeps_ties_stable(mixed: list[Task]) -> None:
    assert _ids(sort_tasks(mixed, SortMode.DUE_ASC)) == [3, 1, 4, 2, 5]


def test_due_desc_puts_missing_due_first_and_keeps_ties_stable(mixed: list[Task]) -> None:
    assert _ids(sort_tasks(mixed, SortMode.DUE_DESC)) == [2, 5, 1, 4, 3]


def test_due_asc_and_desc_are_reverses_without_ties() -> None:
    tasks = _tasks(
        make_record(1, due="2024-02-01"),
        make_record(2, due="2023-12-31"),
        make_record(3, due=None),
        make_record(4, due="2024-01-15"),
    )
    assert _ids(sort_tasks(tasks, "due-asc")) == list(reversed(_ids(sort_tasks(tasks, "due-desc"))))


def test_priority_modes_rank_unknown_lowest(mixed: list[Task]) -> None:
    assert _ids(sort_tasks(mixed, SortMode.PRIO_DESC)) == [2, 5, 3, 1, 4]
    assert _ids(sort_tasks(mixed, SortMode.PRIO_ASC)) == [4, 1, 3, 2, 5]


def test_status_mode_breaks_ties_by_priority_desc(mixed: list[Task]) -> None:
    # unknown status (5) ranks 0 -> first; todo: high(2) before unknown prio(4)
    assert _ids(sort_tasks(mixed, SortMode.STATUS)) == [5, 2, 4, 3, 1]


def test_created_modes_and_fallback(mixed: list[Task]) -> None:
    assert _ids(sort_tasks(mixed, SortMode.CREATED_ASC)) == [2, 5, 3, 4, 1]
    desc = [1, 4, 3, 5, 2]
    assert _ids(sort_tasks(mixed, SortMode.CREATED_DESC)) == desc
    assert _ids(sort_tasks(mixed, "no-such-mode")) == desc
    assert _ids(sort_tasks(mixed, None)) == desc


def test_created_handles_missing_and_mixed_timezones() -> None:
    tasks = _tasks(
        {"id": 1, "title": "a", "created-at": "2024-01-01T12:00:00+02:00"},  # 10:00Z
        {"id": 2, "title": "b", "created-at": "2024-01-01T11:00:00"},  # naive -> UTC
        {"id": 3, "title": "c"},
        {"id": 4, "title": "d", "created_at": "not a date"},
    )
    assert _ids(sort_tasks(tasks, "created-asc")) == [3, 4, 1, 2]
    assert _ids(sort_tasks(tasks, "created-desc")) == [2, 1, 3, 4]


def test_sort_empty_input() -> None:
    assert sort_tasks([], SortMode.STATUS) == []
