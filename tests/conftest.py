"""Shared test fixtures for Big Cartel client and MCP tool tests."""

import json
import os
from dataclasses import dataclass

import pytest
from dotenv import dotenv_values
from unittest.mock import AsyncMock, MagicMock, patch

from bigcartel_server.bigcartel_client import BigCartelClient


@pytest.fixture
def mock_response():
    """Factory for creating mock HTTP responses.

    Usage:
        resp = mock_response(200, {"data": {...}})
        resp = mock_response(500, text="<html>Server Error</html>")
    """
    def _make(status_code=200, json_data=None, text=None, headers=None):
        response = MagicMock()
        response.status_code = status_code
        if json_data is not None:
            body = json.dumps(json_data)
        else:
            body = text or ""
        response.text = body
        response.content = body.encode("utf-8")
        response.headers = headers or {}
        return response
    return _make


@pytest.fixture
def mock_client():
    """Create a BigCartelClient with mocked _request method."""
    with patch.dict("os.environ", {
        "BIGCARTEL_USER_AGENT": "test-agent/1.0",
        "BIGCARTEL_BASIC_AUTH": "dGVzdDpzZWNyZXQ=",
    }):
        client = BigCartelClient.from_env()
    # Frozen dataclass: bypass __setattr__ to swap in the mock.
    object.__setattr__(client, "_request", AsyncMock())
    return client


# All resource modules that import BigCartelClient
_RESOURCE_MODULES = [
    "bigcartel_server.resources.accounts",
    "bigcartel_server.resources.categories",
]


@pytest.fixture
def mock_bigcartel_class():
    """Patch BigCartelClient in all resource modules, yield (mock_class, mock_instance).

    Usage:
        def test_something(mock_bigcartel_class):
            mock_class, mock_instance = mock_bigcartel_class
            mock_instance.get_account = AsyncMock(return_value=...)
            # call the tool function...
    """
    mock_instance = MagicMock()
    mock_class = MagicMock()
    mock_class.from_env.return_value = mock_instance

    patchers = [patch(f"{mod}.BigCartelClient", mock_class) for mod in _RESOURCE_MODULES]
    for p in patchers:
        p.start()
    yield mock_class, mock_instance
    for p in patchers:
        p.stop()


@dataclass(frozen=True)
class IntegrationConfig:
    """Credentials for the live-API tests, read once from .env."""

    user_agent: str
    basic_auth: str
    store_id: str

    def client(self) -> BigCartelClient:
        return BigCartelClient(user_agent=self.user_agent, basic_auth=self.basic_auth)


@pytest.fixture(scope="session")
def integration_config():
    """Explicit live-API configuration; skips when .env lacks credentials."""
    values = {**dotenv_values(".env"), **os.environ}
    user_agent = values.get("BIGCARTEL_USER_AGENT")
    basic_auth = values.get("BIGCARTEL_BASIC_AUTH")
    store_id = values.get("BIGCARTEL_STORE_ID")
    if not (user_agent and basic_auth and store_id):
        pytest.skip("BIGCARTEL_USER_AGENT, BIGCARTEL_BASIC_AUTH and BIGCARTEL_STORE_ID are not set")
    return IntegrationConfig(user_agent=user_agent, basic_auth=basic_auth, store_id=store_id)
