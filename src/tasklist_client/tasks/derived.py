# src/tasklist_client/tasks/derived.py

from __future__ import annotations

from datetime import date, datetime

from .task_models import Task, TaskStatus

OVERDUE_BADGE = "OVERDUE"


def reference_day(reference: date | datetime) -> date:
    """
    Truncate the reference to a local calendar day.
    Aware datetimes are converted to local time first; naive ones are taken as local.
    """
    if isinstance(reference, datetime):
        if reference.tzinfo is not None:
            reference = reference.astimezone()
        return reference.date()
    return reference


def is_overdue(task: Task, reference: date | datetime) -> bool:
    if task.due is None or task.status == TaskStatus.DONE:
        return False
    return task.due < reference_day(reference)


def badges_for(task: Task, overdue: bool) -> tuple[str, ...]:
    badges = [task.status, f"priority:{task.priority}"]
    if overdue:
        badges.append(OVERDUE_BADGE)
    return tuple(badges)
