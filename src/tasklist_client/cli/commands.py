# src/tasklist_client/cli/commands.py

from __future__ import annotations

import dataclasses
import inspect
import logging
from collections.abc import Callable, Mapping
from typing import cast
from urllib.parse import parse_qsl

from ..api.client import TaskApiError
from ..core.state import AppState
from ..tasks import filter_codec, task_api
from ..tasks.payloads import EDITABLE_FIELDS
from ..tasks.task_api import Snapshot
from ..tasks.task_models import SortMode, Summary, TaskView
from .bootstrap import run_with_api

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /list, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- formatting ----


def format_freq(freq: Mapping[str, int] | None) -> str:
    if not freq:
        return "-"
    return ", ".join(f"{k}:{v}" for k, v in freq.items())


def format_summary(summary: Summary) -> str:
    return (
        f"Total: {summary.total} | Status: {format_freq(summary.by_status)} | "
        f"Priority: {format_freq(summary.by_priority)} | Overdue: {summary.overdue}"
    )


def format_view(view: TaskView) -> str:
    t = view.task
    badges = " ".join(f"[{b}]" for b in view.badges)
    line = f"#{t.id} {t.title} {badges}"
    if t.due is not None:
        line += f" due {t.due.isoformat()}"
    extra: list[str] = []
    if t.desc:
        extra.append(f"    {t.desc}")
    if t.tags:
        extra.append("    " + " ".join(f"#{tag}" for tag in t.tags))
    return "\n".join([line, *extra])


def format_views(views: list[TaskView]) -> str:
    if not views:
        return "No tasks to show.\n0 results"
    body = "\n".join(format_view(v) for v in views)
    return f"{body}\n{len(views)} results"


# ---- helpers ----


def _load(state: AppState) -> list[TaskView]:
    views = run_with_api(
        state,
        lambda api: task_api.load_tasks(
            api, filters=state.filters, sort_mode=state.sort_mode, today=state.today()
        ),
    )
    state.last_views = views
    return views


def _refresh(state: AppState) -> Snapshot:
    snap = run_with_api(
        state,
        lambda api: task_api.refresh(
            api, filters=state.filters, sort_mode=state.sort_mode, today=state.today()
        ),
    )
    state.last_views = snap.views
    state.last_summary = snap.summary
    return snap


def _format_snapshot(snap: Snapshot) -> str:
    return f"{format_views(snap.views)}\n{format_summary(snap.summary)}"


def _parse_id(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        return int(args[0].lstrip("#"))
    except ValueError:
        return None


def _fields(text: str) -> list[str]:
    """'a | b | c' -> ['a', 'b', 'c'] (empty slots kept)."""
    return [part.strip() for part in text.split("|")]


# ---- commands ----


def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    qs = filter_codec.encode(state.filters)
    return (
        "Status:\n"
        f"  API: {getattr(state.settings, 'api_base_url', '?')}\n"
        f"  Filters: {qs or '(none)'}\n"
        f"  Sort: {state.sort_mode}\n"
        f"  Today: {state.today().isoformat()}"
    )


def cmd_list(state: AppState, args: list[str]) -> str:
    try:
        return format_views(_load(state))
    except TaskApiError as e:
        logger.info("Load tasks failed: %s", e)
        state.last_views = []
        return f"Error: {e}\n0 results"


def cmd_summary(state: AppState, args: list[str]) -> str:
    try:
        summary = run_with_api(state, task_api.load_summary)
    except TaskApiError as e:
        logger.info("Load summary failed: %s", e)
        return "Failed to load the summary."
    state.last_summary = summary
    return format_summary(summary)


def cmd_filter(state: AppState, args: list[str]) -> str:
    """
    /filter                         -> show current filters
    /filter status=todo q=buy+milk  -> set filters (values are URL-encoded)
    /filter tag=                    -> clear one filter
    """
    if not args:
        qs = filter_codec.encode(state.filters)
        return f"Filters: {qs or '(none)'}"

    qs = "&".join(args)
    updates = filter_codec.decode(qs)
    cleared = {key for key, value in parse_qsl(qs, keep_blank_values=True) if not value.strip()}

    changes: dict[str, str | None] = {}
    for field_name, wire_key in filter_codec.FILTER_KEYS:
        value = getattr(updates, field_name)
        if value is not None:
            changes[field_name] = value
        elif wire_key in cleared:
            changes[field_name] = None

    if not changes:
        known = ", ".join(wire for _, wire in filter_codec.FILTER_KEYS)
        return f"No known filter given. Keys: {known}."

    state.filters = dataclasses.replace(state.filters, **changes)
    return cmd_list(state, [])


def cmd_clear(state: AppState, args: list[str]) -> str:
    state.filters = dataclasses.replace(
        state.filters, status=None, priority=None, tag=None, query=None, due_before=None
    )
    return cmd_list(state, [])


def cmd_sort(state: AppState, args: list[str]) -> str:
    if not args:
        modes = ", ".join(m.value for m in SortMode)
        return f"Sort: {state.sort_mode}. Available: {modes}."
    state.sort_mode = SortMode.parse(args[0])
    if state.sort_mode != args[0].strip():
        logger.info("Unknown sort mode %r, using %s", args[0], state.sort_mode)
    return cmd_list(state, [])


def _mutate(state: AppState, label: str, action) -> str:
    try:
        run_with_api(state, action)
        snap = _refresh(state)
    except TaskApiError as e:
        logger.info("%s failed: %s", label, e)
        return f"Error: {e}"
    except ValueError as e:
        return f"Error: {e}"
    return _format_snapshot(snap)


def cmd_add(state: AppState, args: list[str]) -> str:
    """/add title | desc | priority | due | tags"""
    if not args:
        return "Usage: /add title | desc | priority | due (YYYY-MM-DD) | tags (comma separated)"

    parts = _fields(" ".join(args)) + [""] * 5
    title, desc, priority, due, tags = parts[:5]
    if not title:
        return "Title is required."

    return _mutate(
        state,
        "Create",
        lambda api: task_api.create_task(
            api, title=title, desc=desc, priority=priority or "medium", due=due or None, tags=tags
        ),
    )


def cmd_done(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /done <id>"
    return _mutate(state, "Complete", lambda api: task_api.complete_task(api, task_id))


def cmd_delete(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /del <id>"
    return _mutate(state, "Delete", lambda api: task_api.delete_task(api, task_id))


def cmd_edit(state: AppState, args: list[str]) -> str:
    """/edit <id> title=New title | status=doing | tags=a,b"""
    task_id = _parse_id(args)
    if task_id is None or len(args) < 2:
        return f"Usage: /edit <id> key=value | key=value  (keys: {', '.join(EDITABLE_FIELDS)})"

    fields: dict[str, str] = {}
    for part in _fields(" ".join(args[1:])):
        key, sep, value = part.partition("=")
        if not sep:
            return f"Bad field {part!r}; expected key=value."
        fields[key.strip().lower()] = value

    unknown = set(fields) - set(EDITABLE_FIELDS)
    if unknown:
        return f"Unknown field(s): {', '.join(sorted(unknown))}."
    if not any(v.strip() for v in fields.values()):
        return "Nothing to update."

    return _mutate(state, "Update", lambda api: task_api.update_task(api, task_id, **fields))


def cmd_reset(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not args or args[0].lower() != "confirm":
        return "This deletes ALL tasks. Run /reset confirm to proceed."
    if emit:
        emit("Resetting task database...")
    return _mutate(state, "Reset", task_api.reset_db)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show API, filters, sort and today's date.")
registry.register("list", cmd_list, help_text="Load and show tasks.", aliases=["ls"])
registry.register("summary", cmd_summary, help_text="Show totals by status/priority and overdue count.")
registry.register(
    "filter",
    cmd_filter,
    help_text="Set filters: /filter status=todo priority=high tag=home q=buy+milk due_before=2024-06-01.",
)
registry.register("clear", cmd_clear, help_text="Clear all filters.")
registry.register("sort", cmd_sort, help_text="Set sort mode: /sort due-asc | prio-desc | status | ...")
registry.register("add", cmd_add, help_text="Create a task: /add title | desc | priority | due | tags.")
registry.register("done", cmd_done, help_text="Complete a task: /done <id>.", aliases=["complete"])
registry.register("del", cmd_delete, help_text="Delete a task: /del <id>.", aliases=["delete", "rm"])
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <id> title=... | status=... | tags=a,b.")
registry.register("reset", cmd_reset, help_text="Delete all tasks: /reset confirm.")
