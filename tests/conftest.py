"""Pytest fixtures for metrics server tests."""

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from prometheus_client import CollectorRegistry

from metrics_server.config import Settings
from metrics_server.main import create_app


@pytest.fixture(scope="session")
def registry() -> CollectorRegistry:
    """Return an isolated registry shared by the session application."""
    return CollectorRegistry()


@pytest.fixture(scope="session")
def app(registry: CollectorRegistry) -> FastAPI:
    """Return a FastAPI application bound to the isolated registry."""
    return create_app(Settings(), registry=registry)


@pytest_asyncio.fixture()
async def async_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Provide an `httpx.AsyncClient` configured for the FastAPI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
