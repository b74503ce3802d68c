"""
Pytest configuration and fixtures for Itinera server tests.
"""

from __future__ import annotations

import os

# Set test environment variables before importing config
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("ITINERA_STREAM_PROFILE", "instant")

import httpx  # noqa: E402
import pytest_asyncio  # noqa: E402

from server.main import app  # noqa: E402


@pytest_asyncio.fixture
async def async_client():
    """Async HTTP client against the ASGI app."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
