"""Async HTTP client for the ``/api/tasks`` routes."""

from typing import Any, List, Optional

import httpx
import structlog

from taskboard.schemas.task import Task, TaskStatus

log = structlog.get_logger()


class TaskAPIError(Exception):
    """A request failed: non-2xx response, or no response at all (``status_code`` is None)."""

    def __init__(self, message: str, status_code: Optional[int] = None, errors: Optional[list] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = errors or []

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


def _status_value(status):
    return status.value if isinstance(status, TaskStatus) else status


class TaskAPI:
    def __init__(self, client: httpx.AsyncClient, base_path: str = "/api/tasks"):
        self.client = client
        self.base_path = base_path.rstrip("/")

    async def _request(self, method: str, path: str = "", json: Any = None) -> httpx.Response:
        url = f"{self.base_path}{path}"
        try:
            response = await self.client.request(method, url, json=json)
        except httpx.HTTPError as e:
            log.warning("task_api_unreachable", method=method, url=url, error=str(e))
            raise TaskAPIError(f"Request failed: {e}") from e

        if response.is_success:
            return response

        try:
            body = response.json()
        except ValueError:
            body = {}
        message = body.get("message") if isinstance(body, dict) else None
        errors = body.get("errors") if isinstance(body, dict) else None
        raise TaskAPIError(
            message or f"{response.status_code}: {response.reason_phrase}",
            status_code=response.status_code,
            errors=errors,
        )

    async def list_tasks(self) -> List[Task]:
        response = await self._request("GET")
        return [Task.model_validate(item) for item in response.json()]

    async def get_task(self, task_id: str) -> Task:
        response = await self._request("GET", f"/{task_id}")
        return Task.model_validate(response.json())

    async def create_task(self, title: str, description: str, status=TaskStatus.pending) -> Task:
        payload = {"title": title, "description": description, "status": _status_value(status)}
        response = await self._request("POST", json=payload)
        return Task.model_validate(response.json())

    async def update_task(self, task_id: str, **changes) -> Task:
        """Partial update: only the keyword arguments given are sent."""
        if "status" in changes:
            changes["status"] = _status_value(changes["status"])
        response = await self._request("PUT", f"/{task_id}", json=changes)
        return Task.model_validate(response.json())

    async def delete_task(self, task_id: str) -> None:
        await self._request("DELETE", f"/{task_id}")
