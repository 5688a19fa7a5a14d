# src/tasklist_client/tasks/filter_codec.py

"""
Filter request <-> query string.

Key order on the wire is fixed: status, priority, tag, q, due_before.
Values are only trimmed; enum membership is validated by the data source.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qsl, urlencode

from .task_models import FilterRequest

logger = logging.getLogger(__name__)

# (FilterRequest field, wire key)
FILTER_KEYS: tuple[tuple[str, str], ...] = (
    ("status", "status"),
    ("priority", "priority"),
    ("tag", "tag"),
    ("query", "q"),
    ("due_before", "due_before"),
)


def _field_value(request: FilterRequest | Mapping[str, Any], field_name: str, wire_key: str) -> Any:
    if isinstance(request, FilterRequest):
        return getattr(request, field_name)
    if field_name in request:
        return request[field_name]
    return request.get(wire_key)


def encode(request: FilterRequest | Mapping[str, Any] | None) -> str:
    if request is None:
        request = FilterRequest()

    pairs: list[tuple[str, str]] = []
    for field_name, wire_key in FILTER_KEYS:
        raw = _field_value(request, field_name, wire_key)
        if raw is None:
            continue
        value = str(raw).strip()
        if value:
            pairs.append((wire_key, value))

    qs = urlencode(pairs)
    logger.debug("Filter QS -> %s", qs or "(none)")
    return qs


def decode(query_string: str | None) -> FilterRequest:
    if not query_string:
        return FilterRequest()

    wire_to_field = {wire: name for name, wire in FILTER_KEYS}
    values: dict[str, str] = {}
    for key, value in parse_qsl(query_string.lstrip("?"), keep_blank_values=False):
        name = wire_to_field.get(key)
        if name is None or name in values:
            continue
        values[name] = value

    return FilterRequest.from_values(**values)
