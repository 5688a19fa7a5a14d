# tests/fakes.py

from __future__ import annotations

import json
from collections import Counter
from datetime import date
from typing import Any

import httpx


def make_record(
    id: int,
    *,
    title: str | None = None,
    status: str = "todo",
    priority: str = "medium",
    due: str | None = None,
    created_at: str | None = None,
    desc: str = "",
    tags: list[str] | None = None,
) -> dict[str, Any]:
    return {
        "id": id,
        "title": title or f"task {id}",
        "desc": desc,
        "status": status,
        "priority": priority,
        "due": due,
        "tags": list(tags or []),
        "created-at": created_at or f"2024-01-{id:02d}T10:00:00Z",
    }


class FakeTaskServer:
    """
    In-memory task API used behind httpx.MockTransport.

    - Implements the same routes as the real backend
    - Records every request for assertions
    - `fail_next` forces the next response to an error status
    """

    def __init__(self, records: list[dict[str, Any]] | None = None, today: date = date(2024, 6, 1)) -> None:
        self.records: dict[int, dict[str, Any]] = {r["id"]: dict(r) for r in records or []}
        self.next_id = max(self.records, default=0) + 1
        self.today = today
        self.requests: list[httpx.Request] = []
        self.fail_next: tuple[int, Any] | None = None

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if self.fail_next is not None:
            status, body = self.fail_next
            self.fail_next = None
            if body is None:
                return httpx.Response(status)
            return httpx.Response(status, json=body)

        path = request.url.path
        parts = [p for p in path.split("/") if p]

        if request.method == "GET" and parts == ["tasks"]:
            return httpx.Response(200, json=self._list(request.url.params))
        if request.method == "GET" and parts == ["summary"]:
            return httpx.Response(200, json=self._summary())
        if request.method == "POST" and parts == ["tasks"]:
            return self._create(json.loads(request.content or b"{}"))
        if request.method == "POST" and parts == ["reset-db"]:
            self.records.clear()
            return httpx.Response(200, json={"ok": True})
        if request.method == "POST" and len(parts) == 3 and parts[0] == "tasks":
            return self._action(parts[1], parts[2], request)

        return httpx.Response(404, json={"error": "Not found"})

    # ---- routes ----

    def _list(self, params: httpx.QueryParams) -> list[dict[str, Any]]:
        out = []
        for r in self.records.values():
            if "status" in params and r["status"] != params["status"]:
                continue
            if "priority" in params and r["priority"] != params["priority"]:
                continue
            if "tag" in params and params["tag"] not in r["tags"]:
                continue
            if "q" in params:
                q = params["q"].lower()
                if q not in r["title"].lower() and q not in (r["desc"] or "").lower():
                    continue
            if "due_before" in params and not (r["due"] and r["due"] < params["due_before"]):
                continue
            out.append(r)
        return out

    def _summary(self) -> dict[str, Any]:
        today = self.today.isoformat()
        return {
            "total": len(self.records),
            "by-status": dict(Counter(r["status"] for r in self.records.values())),
            "by-priority": dict(Counter(r["priority"] for r in self.records.values())),
            "overdue": sum(
                1
                for r in self.records.values()
                if r["due"] and r["due"] < today and r["status"] != "done"
            ),
        }

    def _create(self, body: dict[str, Any]) -> httpx.Response:
        if not body.get("title"):
            return httpx.Response(400, json={"error": "title is required"})
        rec = make_record(
            self.next_id,
            title=body["title"],
            priority=body.get("priority") or "medium",
            due=body.get("due"),
            desc=body.get("desc") or "",
            tags=body.get("tags") or [],
        )
        self.records[rec["id"]] = rec
        self.next_id += 1
        return httpx.Response(201, json=rec)

    def _action(self, raw_id: str, action: str, request: httpx.Request) -> httpx.Response:
        rec = self.records.get(int(raw_id))
        if rec is None:
            return httpx.Response(404, json={"error": "Task not found"})
        if action == "complete":
            rec["status"] = "done"
        elif action == "delete":
            del self.records[rec["id"]]
        elif action == "update":
            rec.update(json.loads(request.content or b"{}"))
        else:
            return httpx.Response(404, json={"error": "Not found"})
        return httpx.Response(200, json=rec)
