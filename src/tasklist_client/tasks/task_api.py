# src/tasklist_client/tasks/task_api.py

"""
Task service: data source calls + pipeline.

Loads go through the pipeline (filters -> query, sort + derived fields on the result).
Mutating actions submit a payload, then reload the list and the summary together.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any

from ..core.ports import TaskSource
from .payloads import build_create_payload, build_update_patch
from .pipeline import build_query, build_view
from .task_models import FilterRequest, SortMode, Summary, TaskView

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Result of a refresh: the ordered view plus the server summary."""

    views: list[TaskView]
    summary: Summary


async def load_tasks(
    source: TaskSource,
    *,
    filters: FilterRequest | Mapping[str, Any] | None,
    sort_mode: SortMode | str | None,
    today: date,
) -> list[TaskView]:
    path = build_query(filters)
    raw = await source.list_tasks(path)
    views = build_view(raw, sort_mode, today)
    logger.info("Loaded %d tasks path=%s", len(views), path)
    return views


async def load_summary(source: TaskSource) -> Summary:
    return Summary.from_api(await source.get_summary())


async def refresh(
    source: TaskSource,
    *,
    filters: FilterRequest | Mapping[str, Any] | None,
    sort_mode: SortMode | str | None,
    today: date,
) -> Snapshot:
    views, summary = await asyncio.gather(
        load_tasks(source, filters=filters, sort_mode=sort_mode, today=today),
        load_summary(source),
    )
    return Snapshot(views=views, summary=summary)


async def create_task(
    source: TaskSource,
    *,
    title: str,
    desc: str = "",
    priority: str = "medium",
    due: str | None = None,
    tags: str | None = None,
) -> Any:
    payload = build_create_payload(title=title, desc=desc, priority=priority, due=due, tags=tags)
    created = await source.create_task(payload)
    logger.info("Created task title=%r", payload["title"])
    return created


async def complete_task(source: TaskSource, task_id: int) -> Any:
    result = await source.complete_task(task_id)
    logger.info("Completed task_id=%s", task_id)
    return result


async def delete_task(source: TaskSource, task_id: int) -> Any:
    result = await source.delete_task(task_id)
    logger.info("Deleted task_id=%s", task_id)
    return result


async def update_task(source: TaskSource, task_id: int, **fields: str | None) -> Any | None:
    """Returns None without calling the source when no field was given."""
    patch = build_update_patch(**fields)
    if not patch:
        logger.debug("Update task_id=%s skipped: empty patch", task_id)
        return None
    result = await source.update_task(task_id, patch)
    logger.info("Updated task_id=%s fields=%s", task_id, sorted(patch))
    return result


async def reset_db(source: TaskSource) -> Any:
    result = await source.reset_db()
    logger.warning("Task database reset.")
    return result
