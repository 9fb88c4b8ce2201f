"""Test health endpoints"""
import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    """Test health check endpoint"""
    response = await client.get("/api/health")
    assert response.status_code == 200

    data = response.json()
    assert data["success"] is True
    assert data["message"] == "API is working!"
    assert "timestamp" in data
    assert "environment" in data


@pytest.mark.asyncio
async def test_health_reports_environment(client: AsyncClient, monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    response = await client.get("/api/health")
    assert response.json()["environment"] == "production"


@pytest.mark.asyncio
async def test_config_endpoint(client: AsyncClient):
    """Test config endpoint"""
    response = await client.get("/api/config")
    assert response.status_code == 200

    data = response.json()["data"]
    assert data["statuses"] == ["pending", "in-progress", "completed"]
    assert data["default_status"] == "pending"
    assert data["title_max_length"] == 100
    assert data["description_max_length"] == 500
