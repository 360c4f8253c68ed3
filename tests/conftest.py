"""
Shared pytest fixtures and configuration for all tests.

Tests run against an in-memory SQLite database through aiosqlite. The engine
uses a StaticPool, so every session shares one connection: open sessions one
at a time and let each close before the next starts.
"""

import os
from collections.abc import AsyncGenerator, Generator

import pytest
import pytest_asyncio

from postfeed.dbmodels import Users

from .factories import TEST_DATABASE_URL


@pytest_asyncio.fixture(scope="function")
async def database() -> AsyncGenerator[None, None]:
    """Point the shared engine at a fresh in-memory database with all tables."""
    from postfeed.database.connection import (
        create_tables,
        dispose_database,
        init_database,
        reset_database,
    )

    reset_database()
    init_database(TEST_DATABASE_URL, force_reinit=True)
    await create_tables()

    yield

    await dispose_database()
    reset_database()


@pytest_asyncio.fixture(scope="function")
async def users(database: None) -> dict[str, int]:
    """Create two users and return their ids by name."""
    from postfeed.database.connection import get_async_session

    async with get_async_session() as session:
        alice = Users(username="alice", email="alice@example.com")
        bob = Users(username="bob", email="bob@example.com")
        session.add_all([alice, bob])
        await session.flush()
        ids = {"alice": alice.id, "bob": bob.id}
    return ids


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)
