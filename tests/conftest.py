"""Pytest configuration and fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from app.main import app
from src.replacement_services import ReplacementServices


@pytest.fixture
async def client():
    """Async test client fixture with an empty network."""
    app.state.editor = ReplacementServices()
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
