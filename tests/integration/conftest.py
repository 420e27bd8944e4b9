"""Shared fixtures for integration tests.

Every client gets a freshly built application, and with it an empty
``UserRegistry``, so tests never see each other's users.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable, Generator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from loguru import logger

from src.api.main import create_app
from src.core.config import Settings, get_settings
from src.core.context import RequestContext
from src.core.error_context import _get_sensitive_fields
from src.core.logging import _state

SettingsClientFactoryType = Callable[[Settings], Awaitable[AsyncClient]]


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient]:
    """Create a test client backed by a new application and registry."""
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def client_with_settings() -> AsyncGenerator[SettingsClientFactoryType]:
    """Factory fixture for creating test clients with custom settings.

    Usage:
        async def test_something(client_with_settings):
            settings = Settings(registry_config={"exclude_self_on_update": True})
            client = await client_with_settings(settings)
    """
    clients = []

    async def _create_client(settings: Settings) -> AsyncClient:
        app = create_app(settings)
        app.dependency_overrides[get_settings] = lambda: settings

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        client = AsyncClient(transport=transport, base_url="http://test")
        clients.append(client)
        return client

    yield _create_client

    for client in clients:
        await client.aclose()


@pytest.fixture
def user_payload(valid_tax_ids: tuple[str, ...]) -> dict[str, Any]:
    """Provide a valid JSON body for creating a user."""
    return {
        "name": "Maria Silva",
        "email": "maria@example.com",
        "password": "Str0ng@Pass",
        "tax_id": valid_tax_ids[0],
        "role": "customer",
    }


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None]:
    """Clear cached settings before and after each test."""
    get_settings.cache_clear()
    _get_sensitive_fields.cache_clear()

    yield

    get_settings.cache_clear()
    _get_sensitive_fields.cache_clear()


@pytest.fixture(autouse=True)
def clean_request_context() -> Generator[None]:
    """Clear RequestContext before and after each test."""
    RequestContext.clear()

    yield

    RequestContext.clear()


@pytest.fixture(autouse=True)
def reset_logging_state() -> Generator[None]:
    """Keep application logs off stdout during tests.

    Logging stays marked as configured so ``create_app`` does not add its
    stdout sink again.
    """
    logger.remove()
    _state.configured = True

    yield

    _state.configured = True
    logger.remove()
