"""Health endpoint tests."""

import pytest

from app import __version__
from tests.helpers import network_document


@pytest.mark.asyncio
async def test_health_check(client):
    """Test basic health check endpoint."""
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"] == __version__


@pytest.mark.asyncio
async def test_readiness_reports_network(client):
    """Readiness reports the size and consistency of the network."""
    document = network_document({"U1": ["A", "B", "C"], "U2": ["C", "D"]})
    await client.put("/network", json=document.model_dump())

    response = await client.get("/health/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["stations"] == 4
    assert data["lines"] == 2
    assert data["invariant_violations"] == []
