# src/tasklist_client/tasks/task_models.py

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)


class TaskStatus(StrEnum):
    TODO = "todo"
    DOING = "doing"
    BLOCKED = "blocked"
    DONE = "done"


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SortMode(StrEnum):
    """User-selectable ordering of the task list."""

    DUE_ASC = "due-asc"
    DUE_DESC = "due-desc"
    PRIO_DESC = "prio-desc"
    PRIO_ASC = "prio-asc"
    STATUS = "status"
    CREATED_ASC = "created-asc"
    CREATED_DESC = "created-desc"

    @classmethod
    def parse(cls, raw: str | None) -> SortMode:
        if not raw:
            return cls.CREATED_DESC
        try:
            return cls(str(raw).strip())
        except ValueError:
            return cls.CREATED_DESC


def _clean(value: Any) -> str | None:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def parse_due(raw: Any) -> date | None:
    """Calendar date from 'YYYY-MM-DD' (a trailing time part is ignored)."""
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    s = str(raw).strip()
    if not s:
        return None
    try:
        return date.fromisoformat(s[:10])
    except ValueError:
        logger.debug("Ignoring unparseable due=%r", raw)
        return None


def parse_timestamp(raw: Any) -> datetime | None:
    """
    Aware UTC datetime from an ISO string, a date, or epoch milliseconds.
    Naive values are taken as UTC so every timestamp stays comparable.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, datetime):
        dt = raw
    elif isinstance(raw, date):
        dt = datetime(raw.year, raw.month, raw.day)
    elif isinstance(raw, (int, float)):
        try:
            return datetime.fromtimestamp(raw / 1000.0, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None
    else:
        s = str(raw).strip()
        if not s:
            return None
        try:
            dt = datetime.fromisoformat(s)
        except ValueError:
            logger.debug("Ignoring unparseable created-at=%r", raw)
            return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


@dataclass(frozen=True, slots=True)
class Task:
    """
    A task record as returned by the data source.

    status/priority keep the raw server value (not coerced to the enums) so that
    unknown values stay visible and rank as 0 when sorting.
    """

    id: int
    title: str
    status: str = TaskStatus.TODO.value
    priority: str = TaskPriority.MEDIUM.value
    desc: str | None = None
    due: date | None = None
    tags: tuple[str, ...] = ()
    created_at: datetime | None = None

    @classmethod
    def from_api(cls, raw: Mapping[str, Any]) -> Task:
        tags_raw = raw.get("tags") or ()
        if isinstance(tags_raw, str):
            tags_raw = (tags_raw,)
        created = raw.get("created-at", raw.get("created_at"))
        try:
            task_id = int(raw.get("id") or 0)
        except (TypeError, ValueError):
            task_id = 0
        return cls(
            id=task_id,
            title=str(raw.get("title") or ""),
            status=str(raw.get("status") or ""),
            priority=str(raw.get("priority") or ""),
            desc=_clean(raw.get("desc")),
            due=parse_due(raw.get("due")),
            tags=tuple(str(t) for t in tags_raw if str(t).strip()),
            created_at=parse_timestamp(created),
        )


def as_task(raw: Task | Mapping[str, Any]) -> Task:
    if isinstance(raw, Task):
        return raw
    return Task.from_api(raw)


@dataclass(frozen=True, slots=True)
class FilterRequest:
    """Optional constraints sent to the data source. None means no constraint."""

    status: str | None = None
    priority: str | None = None
    tag: str | None = None
    query: str | None = None
    due_before: str | None = None

    @classmethod
    def from_values(
        cls,
        *,
        status: Any = None,
        priority: Any = None,
        tag: Any = None,
        query: Any = None,
        due_before: Any = None,
    ) -> FilterRequest:
        return cls(
            status=_clean(status),
            priority=_clean(priority),
            tag=_clean(tag),
            query=_clean(query),
            due_before=_clean(due_before),
        )

    def is_empty(self) -> bool:
        return not any((self.status, self.priority, self.tag, self.query, self.due_before))


@dataclass(frozen=True, slots=True)
class TaskView:
    """One row handed to the renderer. overdue/badges are the only display authority."""

    task: Task
    overdue: bool
    badges: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Summary:
    total: int
    by_status: dict[str, int] = field(default_factory=dict)
    by_priority: dict[str, int] = field(default_factory=dict)
    overdue: int = 0

    @classmethod
    def from_api(cls, raw: Mapping[str, Any] | None) -> Summary:
        raw = raw or {}

        def _freq(value: Any) -> dict[str, int]:
            if not isinstance(value, Mapping):
                return {}
            out: dict[str, int] = {}
            for k, v in value.items():
                try:
                    out[str(k)] = int(v)
                except (TypeError, ValueError):
                    continue
            return out

        def _int(value: Any) -> int:
            try:
                return int(value or 0)
            except (TypeError, ValueError):
                return 0

        return cls(
            total=_int(raw.get("total")),
            by_status=_freq(raw.get("by-status", raw.get("by_status"))),
            by_priority=_freq(raw.get("by-priority", raw.get("by_priority"))),
            overdue=_int(raw.get("overdue")),
        )
