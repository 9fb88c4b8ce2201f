"""Pytest configuration for API tests"""
import pytest
from httpx import ASGITransport, AsyncClient

from fakes import FakeCollection
from taskboard.main import app
from taskboard.services.task_repository import TaskRepository, get_task_repository


@pytest.fixture
def collection():
    """Empty in-memory tasks collection"""
    return FakeCollection()


@pytest.fixture
async def client(collection):
    """HTTP client for API testing, backed by the fake collection"""
    app.dependency_overrides[get_task_repository] = lambda: TaskRepository(collection)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
