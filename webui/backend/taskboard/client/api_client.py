"""HTTP client for the task API"""
import logging
import os
from typing import Any, Dict, List, Optional

import httpx

from ..models.task import Task, TaskStatus

logger = logging.getLogger(__name__)

SNIPPET_LENGTH = 200


class ApiClientError(Exception):
    """Any failed call; the message is safe to show to the user"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _snippet(text: str) -> str:
    text = text.strip()
    if len(text) > SNIPPET_LENGTH:
        return text[:SNIPPET_LENGTH] + "..."
    return text


class TaskApiClient:
    """Talks to /api/tasks and unwraps the response envelope"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or os.getenv("TASKBOARD_API_URL", "http://localhost:8000")).rstrip("/")
        kwargs: Dict[str, Any] = {"base_url": self.base_url}
        if transport is not None:
            kwargs["transport"] = transport
        if timeout is not None:
            kwargs["timeout"] = timeout
        self._client = httpx.AsyncClient(**kwargs)

    async def close(self):
        await self._client.aclose()

    async def __aenter__(self) -> "TaskApiClient":
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    async def _request(self, method: str, path: str, json: Any = None) -> Dict[str, Any]:
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ApiClientError(f"Network error: {e}")

        try:
            body = response.json()
        except ValueError:
            message = f"Unexpected response (HTTP {response.status_code}): {_snippet(response.text)}"
            logger.error(f"{method} {path}: {message}")
            raise ApiClientError(message, response.status_code)

        if not isinstance(body, dict):
            raise ApiClientError(
                f"Unexpected response (HTTP {response.status_code}): {_snippet(response.text)}",
                response.status_code,
            )

        if response.is_error or not body.get("success"):
            message = body.get("error") or f"HTTP error! status: {response.status_code}"
            logger.warning(f"{method} {path} returned {response.status_code}: {message}")
            raise ApiClientError(message, response.status_code)

        return body

    async def list_tasks(self) -> List[Task]:
        body = await self._request("GET", "/api/tasks")
        return [Task.model_validate(item) for item in body.get("data") or []]

    async def get_task(self, task_id: str) -> Task:
        body = await self._request("GET", f"/api/tasks/{task_id}")
        return Task.model_validate(body["data"])

    async def create_task(self, fields: Dict[str, Any]) -> Task:
        body = await self._request("POST", "/api/tasks", json=fields)
        return Task.model_validate(body["data"])

    async def update_task(self, task_id: str, fields: Dict[str, Any]) -> Task:
        body = await self._request("PUT", f"/api/tasks/{task_id}", json=fields)
        return Task.model_validate(body["data"])

    async def update_status(self, task_id: str, status: TaskStatus) -> Task:
        """Send only the status field"""
        return await self.update_task(task_id, {"status": TaskStatus(status).value})

    async def delete_task(self, task_id: str) -> str:
        body = await self._request("DELETE", f"/api/tasks/{task_id}")
        return body.get("message", "")
