"""Test harness for unit, integration and E2E tests.

Integration tests run against the PostgreSQL database named by
``DATABASE__URL`` with migrations applied (``scripts/run_migrations.py``).
They are skipped when that database is unreachable.
"""

import pytest
import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError

from spark.config import Settings
from spark.persistence.database import create_engine
from spark.util.di import Component
from tests.di import build_test_container


async def _skip_without_database() -> None:
    """Skip the test when PostgreSQL is unreachable or not migrated."""
    engine = create_engine(Settings())
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1 FROM ideas LIMIT 1"))
    except (DBAPIError, OSError) as e:
        pytest.skip(f"PostgreSQL not available: {e}")
    finally:
        await engine.dispose()


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Skips when real persistence is requested but PostgreSQL is not up
    - Settings loaded from environment automatically

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked, no docker needed
        unit_env = create_env_fixture()

        # Integration tests - real persistence, assumes postgres running
        integration_env = create_env_fixture(unmock={"persistence"})

        # E2E tests - real everything, assumes all services running
        e2e_env = create_env_fixture(unmock={"persistence", "realtime"})

        @pytest.mark.asyncio
        async def test_save_idea(integration_env):
            repo = await integration_env.get(IdeaRepository)
            idea = await repo.save(make_idea(...))
            assert idea.id is not None
    """
    unmock = unmock or set()

    @pytest_asyncio.fixture
    async def _test_environment():
        if "persistence" in unmock:
            await _skip_without_database()

        # Build container with specified unmocking
        container = build_test_container(unmock=unmock)

        # Open request-scoped context
        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment
