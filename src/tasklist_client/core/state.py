# src/tasklist_client/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

import httpx

from ..core.ports import Today
from ..tasks.task_models import FilterRequest, SortMode, Summary, TaskView


@dataclass
class AppState:
    """
    Session state of the console client.

    Holds the user's current selection (filters, sort) and the last rendered list.
    The selection is passed explicitly into the pipeline on every load.
    """

    # Settings object (config.Settings or a test stand-in).
    settings: Any

    today: Today = field(default=date.today)
    filters: FilterRequest = field(default_factory=FilterRequest)
    sort_mode: SortMode = SortMode.CREATED_DESC

    # Injected into TaskApiClient; None means real network.
    transport: httpx.AsyncBaseTransport | None = None

    last_views: list[TaskView] = field(default_factory=list)
    last_summary: Summary | None = None
