"""
Shared pytest fixtures for Concourse Client tests.

Provides a bearer-authenticated httpx transport and normalized entities for
building scoped clients. HTTP traffic is intercepted with pytest-httpx.
"""

from typing import Any, Dict

import httpx
import pytest
import pytest_asyncio

SERVER_URL = "https://ci.example.com"
API_URL = f"{SERVER_URL}/api/v1"


@pytest.fixture
def server_url() -> str:
    return SERVER_URL


@pytest.fixture
def api_url() -> str:
    return API_URL


@pytest.fixture
def bearer_token() -> str:
    return "bearer-token-7f3a9c"


@pytest.fixture
def bearer_headers(bearer_token) -> Dict[str, str]:
    return {"Authorization": f"Bearer {bearer_token}"}


@pytest_asyncio.fixture
async def http_client(bearer_headers):
    """Transport preconfigured with the bearer header."""
    client = httpx.AsyncClient(headers=bearer_headers)
    try:
        yield client
    finally:
        await client.aclose()


@pytest.fixture
def team() -> Dict[str, Any]:
    return {"id": 1, "name": "main", "auth": {"owner": {"users": ["local:admin"]}}}


@pytest.fixture
def pipeline() -> Dict[str, Any]:
    return {
        "id": 14,
        "name": "deploy-app",
        "paused": False,
        "public": True,
        "teamName": "main",
    }


@pytest.fixture
def job() -> Dict[str, Any]:
    return {
        "id": 52,
        "name": "unit-tests",
        "pipelineName": "deploy-app",
        "teamName": "main",
        "paused": False,
    }


@pytest.fixture
def resource() -> Dict[str, Any]:
    return {
        "name": "app-source",
        "pipelineName": "deploy-app",
        "teamName": "main",
        "type": "git",
    }
