"""
Tests for health check endpoint.
"""

import pytest
from httpx import AsyncClient

from column_analyzer.core.config import settings


@pytest.mark.asyncio
async def test_health_endpoint_returns_200(test_client: AsyncClient):
    """Test that /health endpoint returns 200 status code."""
    response = await test_client.get("/health")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_health_endpoint_has_status(test_client: AsyncClient):
    """Test that /health endpoint reports healthy."""
    response = await test_client.get("/health")
    data = response.json()
    assert data["status"] == "healthy"


@pytest.mark.asyncio
async def test_health_endpoint_has_version(test_client: AsyncClient):
    """Test that /health endpoint returns the configured version."""
    response = await test_client.get("/health")
    data = response.json()
    assert data["version"] == settings.APP_VERSION


@pytest.mark.asyncio
async def test_responses_carry_timing_header(test_client: AsyncClient):
    """Test that the request logger adds a response time header."""
    response = await test_client.get("/health")
    assert "x-response-time-ms" in response.headers
