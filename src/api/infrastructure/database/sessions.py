"""Async session management.

Provides the process-wide engine and sessionmaker, a session scope for
callers outside a web framework, and engine disposal for shutdown.
"""

from __future__ import annotations

import threading
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_engine
from infrastructure.observability import DefaultConnectionProbe
from infrastructure.settings import get_database_settings

_probe = DefaultConnectionProbe()

# Created on first use
_engine: AsyncEngine | None = None
_sessionmaker: async_sessionmaker[AsyncSession] | None = None

_engine_lock = threading.Lock()


def get_engine() -> AsyncEngine:
    """Get the database engine (singleton).

    Creates the engine and its sessionmaker on first call. Uses double-check
    locking for thread-safe initialization.

    Returns:
        Configured async engine
    """
    global _engine, _sessionmaker
    if _engine is None:
        with _engine_lock:
            if _engine is None:
                settings = get_database_settings()
                _engine = create_engine(settings)
                _sessionmaker = async_sessionmaker(
                    _engine,
                    expire_on_commit=False,
                    class_=AsyncSession,
                )
                _probe.engine_created(settings.connection_string, settings.pool_size)
    return _engine


def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Get the sessionmaker bound to the singleton engine."""
    get_engine()
    assert _sessionmaker is not None
    return _sessionmaker


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """Provide a session for one unit of work.

    The session does NOT auto-commit. Application services own the
    transaction with ``async with session.begin()``.

    Usage:
        async with session_scope() as session:
            service = LetterService(session=session, ...)
            await service.submit_letter(...)

    Yields:
        AsyncSession for database operations
    """
    async with get_sessionmaker()() as session:
        yield session


async def close_database_connections() -> None:
    """Dispose of the engine so the next use re-creates it.

    Should be called on application shutdown to release pooled connections.
    """
    global _engine, _sessionmaker

    if _engine is not None:
        await _engine.dispose()
        _probe.engine_disposed()
        _engine = None
        _sessionmaker = None
