"""Test harness for unit, integration and E2E tests.

Settings are loaded from environment variables (configure via .env or export).
"""

import pytest
import pytest_asyncio
from dishka.integrations.fastapi import FastapiProvider
from fastapi.testclient import TestClient

from querynet.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that builds a test container with the given
    components unmocked and yields a request-scoped container for service
    access.

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked, no database needed
        unit_env = create_env_fixture()

        # Integration tests - real persistence, assumes postgres running
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_ask(unit_env):
            service = await unit_env.get(QuestionService)
            ...
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment


def create_client_fixture():
    """Factory for a TestClient fixture backed by in-memory persistence.

    Each test gets a fresh container, so data never leaks between tests.
    """

    @pytest.fixture
    def _client():
        from querynet.interface.api.app import create_app

        container = build_test_container(extra_providers=(FastapiProvider(),))
        app = create_app(container=container)
        with TestClient(app) as client:
            yield client

    return _client
