"""
Database connection management
"""

import os
import threading
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from ..config import settings
from ..dbmodels import Base
from ..logging import get_logger

logger = get_logger(__name__)

# Shared engine and session factory for the process
_async_engine: AsyncEngine | None = None
_async_session_local: async_sessionmaker[AsyncSession] | None = None
_initialized = False
_init_lock = threading.Lock()

_ASYNC_DRIVERS = {
    "postgresql://": "postgresql+asyncpg://",
    "postgres://": "postgresql+asyncpg://",
    "sqlite://": "sqlite+aiosqlite://",
}


def get_database_url() -> str:
    """Get database URL, checking the environment first so tests can override it late."""
    return os.getenv("POSTFEED_DATABASE_URL") or settings.database_url


def to_async_url(db_url: str) -> str:
    """Rewrite a plain database URL to use its asyncio driver."""
    for prefix, async_prefix in _ASYNC_DRIVERS.items():
        if db_url.startswith(prefix):
            return async_prefix + db_url[len(prefix) :]
    if db_url.startswith(("postgresql+asyncpg://", "sqlite+aiosqlite://")):
        return db_url
    raise RuntimeError(f"Unsupported database URL for async access: {db_url.split('://')[0]}")


def is_memory_database(async_url: str) -> bool:
    url = make_url(async_url)
    return url.database in (None, "", ":memory:") or url.query.get("mode") == "memory"


def _engine_options(async_url: str) -> dict[str, Any]:
    if async_url.startswith("sqlite"):
        options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if is_memory_database(async_url):
            # One shared connection, so in-memory databases survive across sessions
            options["poolclass"] = StaticPool
        return options
    return {
        "pool_size": settings.database_pool_size,
        "max_overflow": settings.database_max_overflow,
        "pool_pre_ping": True,
    }


def reset_database() -> None:
    """Forget the shared engine (for tests). Call ``dispose_database`` first to close it."""
    global _async_engine, _async_session_local, _initialized
    _async_engine = None
    _async_session_local = None
    _initialized = False


def init_database(database_url: str | None = None, force_reinit: bool = False) -> None:
    """Initialize the shared async engine and session factory.

    Thread-safe; repeated calls are no-ops unless ``force_reinit`` is set or an
    explicit URL is passed.
    """
    global _async_engine, _async_session_local, _initialized

    if _initialized and not force_reinit and database_url is None:
        return

    with _init_lock:
        if _initialized and not force_reinit and database_url is None:
            return

        async_url = to_async_url(database_url or get_database_url())

        _async_engine = create_async_engine(
            async_url,
            echo=settings.sql_echo,
            **_engine_options(async_url),
        )
        _async_session_local = async_sessionmaker(
            _async_engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )

        _initialized = True
        logger.info("Database initialized", driver=_async_engine.url.drivername)


def get_async_engine() -> AsyncEngine:
    """Get the shared async SQLAlchemy engine."""
    if _async_engine is None:
        init_database()
    assert _async_engine is not None
    return _async_engine


async def dispose_database() -> None:
    """Close every pooled connection of the shared engine."""
    if _async_engine is not None:
        await _async_engine.dispose()
        logger.info("Database connections disposed")


async def create_tables() -> None:
    """Create all tables that do not exist yet (local development and tests)."""
    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created", tables=sorted(Base.metadata.tables))


async def check_database_connection() -> tuple[bool, str | None]:
    """Run ``SELECT 1`` and return ``(ok, error_message)``."""
    if _async_engine is None:
        return False, "Database engine not initialized"

    try:
        async with _async_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
            return True, None
    except Exception as e:
        error_str = str(e)
        if "Connection refused" in error_str or "could not connect" in error_str:
            return False, (
                f"Cannot connect to database server: {error_str}\n"
                f"Please check that the database is running and accessible."
            )
        if "password authentication failed" in error_str:
            return False, f"Database authentication failed: {error_str}"
        return False, f"Database connection error ({type(e).__name__}): {error_str}"


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session (async) from the shared pool."""
    if _async_session_local is None:
        init_database()

    if _async_session_local is None:
        raise RuntimeError("Async database not available")

    async with _async_session_local() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
