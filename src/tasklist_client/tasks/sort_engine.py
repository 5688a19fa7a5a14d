# src/tasklist_client/tasks/sort_engine.py

"""
Sort modes for the task list.

Every mode builds a key function and relies on Python's stable sort, so records with
equal keys keep their input order (also for the descending modes, which use
reverse=True rather than negated keys).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import UTC, date, datetime
from typing import Any

from .task_models import SortMode, Task, TaskPriority, TaskStatus

PRIORITY_RANK: dict[str, int] = {
    TaskPriority.HIGH: 3,
    TaskPriority.MEDIUM: 2,
    TaskPriority.LOW: 1,
}

STATUS_RANK: dict[str, int] = {
    TaskStatus.TODO: 1,
    TaskStatus.DOING: 2,
    TaskStatus.BLOCKED: 3,
    TaskStatus.DONE: 4,
}

UNRANKED = 0

# Absent due date sorts as the last representable date.
NO_DUE_SENTINEL = date.max
# Absent created-at sorts as the earliest timestamp.
NO_CREATED_SENTINEL = datetime.min.replace(tzinfo=UTC)


def prio_rank(priority: str | None) -> int:
    return PRIORITY_RANK.get(priority, UNRANKED)  # type: ignore[arg-type]


def status_rank(status: str | None) -> int:
    return STATUS_RANK.get(status, UNRANKED)  # type: ignore[arg-type]


def due_or_max(task: Task) -> date:
    return task.due if task.due is not None else NO_DUE_SENTINEL


def created_or_min(task: Task) -> datetime:
    return task.created_at if task.created_at is not None else NO_CREATED_SENTINEL


def _status_key(task: Task) -> tuple[int, int]:
    # status ascending, then priority descending
    return (status_rank(task.status), -prio_rank(task.priority))


# mode -> (key, reverse)
_SORTS: dict[SortMode, tuple[Callable[[Task], Any], bool]] = {
    SortMode.DUE_ASC: (due_or_max, False),
    SortMode.DUE_DESC: (due_or_max, True),
    SortMode.PRIO_DESC: (lambda t: prio_rank(t.priority), True),
    SortMode.PRIO_ASC: (lambda t: prio_rank(t.priority), False),
    SortMode.STATUS: (_status_key, False),
    SortMode.CREATED_ASC: (created_or_min, False),
    SortMode.CREATED_DESC: (created_or_min, True),
}


def sort_tasks(tasks: Iterable[Task], mode: SortMode | str | None) -> list[Task]:
    """Return a new list ordered by `mode`; unknown modes fall back to created-desc."""
    key, reverse = _SORTS[SortMode.parse(mode)]
    return sorted(tasks, key=key, reverse=reverse)
