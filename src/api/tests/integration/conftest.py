"""Integration test fixtures for database tests.

These fixtures require a running PostgreSQL instance. The schema is
created from the ORM metadata and dropped again after the session.
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import UTC, datetime

import pytest
import pytest_asyncio
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from iam.domain.aggregates import User
from iam.domain.value_objects import (
    OAuthProvider,
    ProviderIdentity,
    UserId,
    UserRole,
)
from iam.infrastructure.user_repository import UserRepository
from infrastructure.database import load_all_models
from infrastructure.database.engines import create_engine
from infrastructure.settings import DatabaseSettings


@pytest.fixture(scope="session")
def integration_db_settings() -> DatabaseSettings:
    """Database settings for integration tests.

    Override with environment variables:
        LETTERBOX_DB_HOST, LETTERBOX_DB_PORT, etc.
    """
    return DatabaseSettings(
        host=os.getenv("LETTERBOX_DB_HOST", "localhost"),
        port=int(os.getenv("LETTERBOX_DB_PORT", "5432")),
        database=os.getenv("LETTERBOX_DB_DATABASE", "letterbox_test"),
        username=os.getenv("LETTERBOX_DB_USERNAME", "letterbox"),
        password=SecretStr(
            os.getenv("LETTERBOX_DB_PASSWORD", "letterbox_dev_password")
        ),
        pool_size=5,
    )


@pytest_asyncio.fixture
async def engine(
    integration_db_settings: DatabaseSettings,
) -> AsyncGenerator[AsyncEngine, None]:
    """Provide an engine on a freshly created schema."""
    engine = create_engine(integration_db_settings)
    metadata = load_all_models()

    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
        await conn.run_sync(metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Sessionmaker for the test engine.

    Services own their transactions, so each use case gets its own session.
    """
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
def create_user(
    sessionmaker: async_sessionmaker[AsyncSession],
) -> Callable[..., Awaitable[User]]:
    """Factory that stores a registered user."""

    async def _create(role: UserRole, nickname: str, quota: int = 3) -> User:
        now = datetime.now(UTC)
        user_id = UserId.generate()
        user = User(
            id=user_id,
            identity=ProviderIdentity(
                provider=OAuthProvider.KAKAO, provider_id=user_id.value.lower()
            ),
            email=None,
            nickname=nickname,
            birth_year=None,
            created_at=now,
            last_login_at=now,
            quota=quota,
            role=role,
        )
        async with sessionmaker() as session, session.begin():
            await UserRepository(session).save(user)
        return user

    return _create
