# src/tasklist_client/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used around the task list pipeline.

The service layer depends on Protocols instead of the concrete HTTP client.
This keeps the data source swappable and makes testing easier.
"""

from datetime import date
from typing import Any, Awaitable, Callable, Protocol

TaskRecord = dict[str, Any]
# Wire-shaped task record: {"id": 1, "title": "...", "status": "todo", ...}.

Today = Callable[[], date]
# Supplies the reference date for overdue computation.


class TaskSource(Protocol):
    """Remote data source for task records (HTTP API in production)."""

    def list_tasks(self, path: str = "/tasks") -> Awaitable[list[TaskRecord]]: ...
    def get_summary(self) -> Awaitable[dict[str, Any]]: ...

    # Mutating actions
    def create_task(self, payload: dict[str, Any]) -> Awaitable[Any]: ...
    def complete_task(self, task_id: int) -> Awaitable[Any]: ...
    def delete_task(self, task_id: int) -> Awaitable[Any]: ...
    def update_task(self, task_id: int, patch: dict[str, Any]) -> Awaitable[Any]: ...
    def reset_db(self) -> Awaitable[Any]: ...
