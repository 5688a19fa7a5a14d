# src/tasklist_client/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- builds AppState with the configured defaults,
- opens TaskApiClient sessions and runs service coroutines to completion.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from ..api.client import TaskApiClient, make_timeout
from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_models import SortMode

logger = logging.getLogger(__name__)

T = TypeVar("T")


def create_initial_state(*, settings=None, transport=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    state = AppState(
        settings=settings,
        sort_mode=SortMode.parse(getattr(settings, "default_sort", None)),
        transport=transport,
    )
    logger.debug("State ready api=%s sort=%s", settings.api_base_url, state.sort_mode)
    return state


def make_api_client(state: AppState) -> TaskApiClient:
    settings = state.settings
    timeout = make_timeout(
        connect_s=float(getattr(settings, "connect_timeout_seconds", 5.0)),
        read_s=float(getattr(settings, "read_timeout_seconds", 15.0)),
    )
    return TaskApiClient(settings.api_base_url, timeout=timeout, transport=state.transport)


def run_with_api(state: AppState, action: Callable[[TaskApiClient], Awaitable[T]]) -> T:
    """Open one API session, run `action` in it, close the session."""

    async def _runner() -> T:
        async with make_api_client(state) as api:
            return await action(api)

    return asyncio.run(_runner())
