# src/tasklist_client/api/client.py

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class TaskApiError(RuntimeError):
    """Non-success response or transport failure talking to the task API."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def make_timeout(connect_s: float, read_s: float) -> httpx.Timeout:
    return httpx.Timeout(
        connect=connect_s,
        read=read_s,
        write=10.0,
        pool=connect_s,
    )


def _json_or_none(response: httpx.Response) -> Any:
    # Body may be empty (e.g. 204) or not JSON at all.
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def error_message(response: httpx.Response, data: Any) -> str:
    if isinstance(data, dict):
        msg = data.get("error")
        if msg:
            return str(msg)
    return response.reason_phrase or "Request failed"


class TaskApiClient:
    """
    Async client for the task API.

    Use as an async context manager; one underlying httpx.AsyncClient per session.
    `transport` is injectable (httpx.MockTransport in tests).
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: httpx.Timeout | float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout if timeout is not None else make_timeout(5.0, 15.0)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> TaskApiClient:
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"Content-Type": "application/json"},
            timeout=self._timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(self, method: str, path: str, *, json: Any = None) -> Any:
        if self._client is None:
            raise RuntimeError("TaskApiClient is not open; use 'async with'.")

        try:
            response = await self._client.request(method, path, json=json)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise TaskApiError(str(e) or e.__class__.__name__) from e

        data = _json_or_none(response)
        if not response.is_success:
            msg = error_message(response, data)
            logger.info("%s %s -> %s: %s", method, path, response.status_code, msg)
            raise TaskApiError(msg, status_code=response.status_code)

        logger.debug("%s %s -> %s", method, path, response.status_code)
        return data

    # ---- endpoints ----

    async def list_tasks(self, path: str = "/tasks") -> list[dict[str, Any]]:
        data = await self.request("GET", path)
        if not isinstance(data, list):
            return []
        return [t for t in data if isinstance(t, dict)]

    async def get_summary(self) -> dict[str, Any]:
        data = await self.request("GET", "/summary")
        return data if isinstance(data, dict) else {}

    async def create_task(self, payload: dict[str, Any]) -> Any:
        return await self.request("POST", "/tasks", json=payload)

    async def complete_task(self, task_id: int) -> Any:
        return await self.request("POST", f"/tasks/{int(task_id)}/complete")

    async def delete_task(self, task_id: int) -> Any:
        return await self.request("POST", f"/tasks/{int(task_id)}/delete")

    async def update_task(self, task_id: int, patch: dict[str, Any]) -> Any:
        return await self.request("POST", f"/tasks/{int(task_id)}/update", json=patch)

    async def reset_db(self) -> Any:
        return await self.request("POST", "/reset-db")
