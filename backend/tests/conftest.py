"""
Shared pytest fixtures for the column analyzer test suite.
"""

import pytest
from typing import AsyncGenerator, Any, Dict, List

from httpx import AsyncClient, ASGITransport
from column_analyzer.main import app


@pytest.fixture
def sample_rows() -> List[Dict[str, Any]]:
    """Ten rows covering every detected type, with one missing temperature."""
    statuses = ["ok", "ok", "fail", "ok", "ok", "fail", "ok", "ok", "ok", "fail"]
    flags = ["yes", "no", "yes", "yes", "no", "no", "yes", "no", "yes", "yes"]
    temperatures = [20.5, 21.0, 21.5, None, 22.5, 23.0, 23.5, 24.0, 24.5, 25.0]
    return [
        {
            "id": i + 1,
            "temperature": temperatures[i],
            "date": f"2024-01-{i + 1:02d}",
            "status": statuses[i],
            "flag": flags[i],
            "note": f"observation number {i + 1} looked fine",
            "empty": None,
        }
        for i in range(10)
    ]


@pytest.fixture
def linear_series() -> List[float]:
    """y = x + 1 over x = 0..4."""
    return [1.0, 2.0, 3.0, 4.0, 5.0]


@pytest.fixture
def noisy_series() -> List[float]:
    return [1.0, 3.0, 2.0, 5.0, 4.0, 6.5, 6.0]


@pytest.fixture
def sample_csv_bytes() -> bytes:
    return (
        b"day,sales,region\n"
        b"2024-01-01,10,north\n"
        b"2024-01-02,12,south\n"
        b"2024-01-03,,north\n"
        b"2024-01-04,15,north\n"
        b"2024-01-05,18,south\n"
    )


@pytest.fixture
async def test_client() -> AsyncGenerator[AsyncClient, None]:
    """Provide an async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
