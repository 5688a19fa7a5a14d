# src/tasklist_client/tasks/payloads.py

from __future__ import annotations

from typing import Any

from .task_models import TaskPriority

EDITABLE_FIELDS = ("title", "desc", "status", "priority", "due", "tags")


def parse_tags(raw: str | None) -> list[str]:
    """'a, b,,c ' -> ['a', 'b', 'c']. Order kept, duplicates kept."""
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def build_create_payload(
    *,
    title: str,
    desc: str = "",
    priority: str = TaskPriority.MEDIUM.value,
    due: str | None = None,
    tags: str | None = None,
) -> dict[str, Any]:
    title = (title or "").strip()
    if not title:
        raise ValueError("title is required")

    return {
        "title": title,
        "desc": (desc or "").strip(),
        "priority": (priority or "").strip() or TaskPriority.MEDIUM.value,
        "due": (due or "").strip() or None,
        "tags": parse_tags(tags),
    }


def build_update_patch(**fields: str | None) -> dict[str, Any]:
    """
    Keep only the fields that were actually given (blank means "leave unchanged").
    An empty result means there is nothing to send.
    """
    unknown = set(fields) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValueError(f"unknown field(s): {', '.join(sorted(unknown))}")

    patch: dict[str, Any] = {}
    for name in EDITABLE_FIELDS:
        value = (fields.get(name) or "").strip()
        if not value:
            continue
        if name == "tags":
            tags = parse_tags(value)
            if tags:
                patch["tags"] = tags
            continue
        patch[name] = value
    return patch
