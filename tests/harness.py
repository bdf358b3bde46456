"""Test harness for unit and integration tests.

Integration tests assume PostgreSQL is running and migrated. Settings are
loaded from environment variables (configure via .env or export).
"""

import pytest_asyncio

from crushboard.config import Settings
from crushboard.util.di import Component
from tests.di import build_test_container


def create_env_fixture(
    unmock: set[Component] | None = None, settings: Settings | None = None
):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a fresh test container with the requested unmocking
    - Yields a request-scoped container for service access

    Args:
        unmock: Components to use real implementations for
        settings: Settings served by the container (test defaults if omitted)

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - in-memory persistence
        unit_env = create_env_fixture()

        # Integration tests - real persistence, assumes postgres running
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_cast_vote(unit_env):
            vote_service = await unit_env.get(VoteService)
            ...
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set(), settings=settings)

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment
