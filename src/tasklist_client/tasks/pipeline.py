# src/tasklist_client/tasks/pipeline.py

"""
Task list pipeline.

filter request -> query path (sent to the data source by the caller)
raw tasks -> sort -> derived fields -> list[TaskView] (handed to the renderer)

Everything here is pure: no I/O, no clock reads, no state kept between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from datetime import date, datetime
from typing import Any

from . import filter_codec
from .derived import badges_for, is_overdue
from .sort_engine import sort_tasks
from .task_models import FilterRequest, SortMode, Task, TaskView, as_task

logger = logging.getLogger(__name__)

TASKS_PATH = "/tasks"


def build_query(request: FilterRequest | Mapping[str, Any] | None) -> str:
    qs = filter_codec.encode(request)
    return f"{TASKS_PATH}?{qs}" if qs else TASKS_PATH


def build_view(
    raw_tasks: Iterable[Task | Mapping[str, Any]],
    sort_mode: SortMode | str | None,
    reference_date: date | datetime,
) -> list[TaskView]:
    tasks = [as_task(t) for t in raw_tasks]
    ordered = sort_tasks(tasks, sort_mode)

    views: list[TaskView] = []
    for task in ordered:
        overdue = is_overdue(task, reference_date)
        views.append(TaskView(task=task, overdue=overdue, badges=badges_for(task, overdue)))

    logger.debug(
        "Built view: %d tasks mode=%s overdue=%d",
        len(views),
        SortMode.parse(sort_mode),
        sum(1 for v in views if v.overdue),
    )
    return views


class TaskListPipeline:
    """
    build_query/build_view with the reference date supplied by an injected clock.

    The clock is the only collaborator; sort mode and filters are always passed in.
    """

    def __init__(self, today: Callable[[], date | datetime]) -> None:
        self._today = today

    def query_for(self, request: FilterRequest | Mapping[str, Any] | None) -> str:
        return build_query(request)

    def view(
        self,
        raw_tasks: Iterable[Task | Mapping[str, Any]],
        sort_mode: SortMode | str | None,
    ) -> list[TaskView]:
        return build_view(raw_tasks, sort_mode, self._today())
