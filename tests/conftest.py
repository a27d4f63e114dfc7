"""
Common fixtures for all test modules.
This file contains fixtures that are shared across different test types.
"""

from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from ollama_api_component import MockOllamaClient
from src.config.settings import Settings, get_settings
from src.main import create_app

# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """
    Drops the cached Settings before and after every test so that environment
    changes made with monkeypatch are picked up.
    """
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        OLLAMA_BASE_URL="http://ollama.test/api", OLLAMA_TIMEOUT=1000, LOG_LEVEL="DEBUG"
    )


# =============================================================================
# Client Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_client():
    """
    Provides a MockOllamaClient with zero delay and predictable responses for fast testing.
    """
    predictable_responses = [
        "Test response 1",
        "Test response 2",
        "Test response 3",
    ]
    return MockOllamaClient(token_delay=0, responses=predictable_responses)


@pytest.fixture
def failing_client() -> MagicMock:
    """
    A client double whose operations can be given return values or side effects.
    """
    client = MagicMock()
    client.generate = AsyncMock()
    client.list_models = AsyncMock()
    client.pull_model = AsyncMock()
    return client


# =============================================================================
# App Fixtures
# =============================================================================


@pytest.fixture
def make_test_client(test_settings):
    """
    Builds an app around the given Ollama client and returns an AsyncClient
    that talks to it in-process.
    """

    def _make(ollama_client) -> AsyncClient:
        app = create_app(settings=test_settings, client=ollama_client)
        return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")

    return _make


@pytest.fixture
async def unit_test_client(
    make_test_client, mock_client
) -> AsyncGenerator[AsyncClient, None]:
    """
    Provides a test client backed by MockOllamaClient, with no network access.
    """
    async with make_test_client(mock_client) as c:
        yield c
