"""End-to-end tests against a running API backed by a real MongoDB.

Run with TASKBOARD_E2E=1 and TASKBOARD_API_URL pointing at the server.
"""
import os

import pytest

from taskboard.client.api_client import ApiClientError, TaskApiClient
from taskboard.models.task import TaskStatus

pytestmark = [
    pytest.mark.e2e,
    pytest.mark.skipif(os.getenv("TASKBOARD_E2E") != "1", reason="TASKBOARD_E2E=1 not set"),
]


@pytest.mark.asyncio
async def test_task_lifecycle():
    """Create, read, change status, delete, then confirm it is gone"""
    async with TaskApiClient() as client:
        created = await client.create_task({
            "title": "Buy milk",
            "description": "2%",
            "dueDate": "2025-01-10",
            "status": "pending",
        })

        try:
            fetched = await client.get_task(created.id)
            assert fetched.title == "Buy milk"
            assert fetched.dueDate.date().isoformat() == "2025-01-10"

            updated = await client.update_status(created.id, TaskStatus.COMPLETED)
            assert updated.status == TaskStatus.COMPLETED
            assert updated.title == fetched.title
            assert updated.updatedAt >= fetched.updatedAt
        finally:
            await client.delete_task(created.id)

        with pytest.raises(ApiClientError) as exc_info:
            await client.get_task(created.id)
        assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_list_includes_new_task():
    async with TaskApiClient() as client:
        created = await client.create_task({"title": "Listed", "description": "d", "dueDate": "2025-06-01"})
        try:
            ids = [task.id for task in await client.list_tasks()]
            assert created.id in ids
        finally:
            await client.delete_task(created.id)
