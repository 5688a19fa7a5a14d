# tests/conftest.py

from __future__ import annotations

from datetime import date
from pathlib import Path
from types import SimpleNamespace

import pytest

from tasklist_client.cli.bootstrap import create_initial_state
from tasklist_client.core.state import AppState

from .fakes import FakeTaskServer, make_record

TODAY = date(2024, 6, 1)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    return SimpleNamespace(
        app_name="tasklist-test",
        log_level="DEBUG",
        log_to_file=False,
        data_dir=tmp_path,
        api_base_url="http://tasks.test",
        connect_timeout_seconds=1.0,
        read_timeout_seconds=1.0,
        default_sort="created-desc",
    )


@pytest.fixture()
def server() -> FakeTaskServer:
    return FakeTaskServer(
        [
            make_record(1, title="Buy milk", status="todo", priority="low", due="2024-05-30", tags=["home"]),
            make_record(2, title="Write report", status="doing", priority="high", due="2024-06-10"),
            make_record(3, title="Call bank", status="done", priority="medium", due="2024-01-15"),
        ],
        today=TODAY,
    )


@pytest.fixture()
def state(settings: SimpleNamespace, server: FakeTaskServer) -> AppState:
    """AppState wired to the in-memory server and a fixed 'today'."""
    st = create_initial_state(settings=settings, transport=server.transport)
    st.today = lambda: TODAY
    return st
