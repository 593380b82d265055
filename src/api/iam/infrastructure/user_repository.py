"""PostgreSQL implementation of IUserRepository.

Users are created from OAuth provider profiles. Besides whole-aggregate
saves, the repository issues targeted UPDATE statements for the columns that
change per request (last login, quota), so concurrent requests never
overwrite each other's values.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import exists, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import User
from iam.domain.value_objects import (
    BirdId,
    CategoryId,
    OAuthProvider,
    ProviderIdentity,
    UserId,
    UserRole,
)
from iam.infrastructure.models import UserModel
from iam.infrastructure.observability import (
    DefaultUserRepositoryProbe,
    UserRepositoryProbe,
)
from iam.ports.exceptions import (
    DuplicateProviderIdentityError,
    QuotaExceededError,
    UserNotFoundError,
)
from iam.ports.repositories import IUserRepository

PROVIDER_IDENTITY_CONSTRAINT = "uq_users_provider_provider_id"


class UserRepository(IUserRepository):
    """PostgreSQL-backed repository for User aggregates."""

    def __init__(
        self, session: AsyncSession, probe: UserRepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession whose transaction is owned by the caller
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultUserRepositoryProbe()

    async def save(self, user: User) -> None:
        """Persist a user aggregate.

        Creates a new user or updates an existing one. For an existing user
        quota and last_login_at are left untouched; they change only through
        decrement_quota and update_last_login_at. Flushes so that a unique
        violation surfaces here rather than at commit.

        Args:
            user: The User aggregate to persist

        Raises:
            DuplicateProviderIdentityError: If the provider identity is taken
        """
        stmt = select(UserModel).where(UserModel.id == user.id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            model = UserModel(
                id=user.id.value,
                provider=user.identity.provider.value,
                provider_id=user.identity.provider_id,
                signed_up_at=user.created_at,
                quota=user.quota,
                last_login_at=user.last_login_at,
            )
            self._session.add(model)

        model.email = user.email
        model.nickname = user.nickname
        model.birth_year = user.birth_year
        model.role = user.role.value if user.role else None
        model.bird_id = user.bird_id.value if user.bird_id else None
        model.category_id = user.category_id.value if user.category_id else None
        model.refresh_token = user.refresh_token

        try:
            await self._session.flush()
        except IntegrityError as e:
            if PROVIDER_IDENTITY_CONSTRAINT in str(e.orig):
                self._probe.duplicate_provider_identity(
                    user.identity.provider.value, user.identity.provider_id
                )
                raise DuplicateProviderIdentityError(
                    f"A user already exists for {user.identity}"
                ) from e
            raise

        self._probe.user_saved(user.id.value, user.identity.provider.value)

    async def get_by_id(self, user_id: UserId) -> User | None:
        """Retrieve a user by their ID.

        Args:
            user_id: The unique identifier of the user

        Returns:
            The User aggregate, or None if not found
        """
        stmt = select(UserModel).where(UserModel.id == user_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.user_not_found(user_id.value)
            return None

        self._probe.user_retrieved(model.id)
        return self._to_domain(model)

    async def get_by_provider_identity(
        self, identity: ProviderIdentity
    ) -> User | None:
        """Retrieve a user by provider identity.

        Args:
            identity: The (provider, provider_id) pair

        Returns:
            The User aggregate, or None if not found
        """
        stmt = select(UserModel).where(
            UserModel.provider == identity.provider.value,
            UserModel.provider_id == identity.provider_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.user_not_found(str(identity))
            return None

        self._probe.user_retrieved(model.id)
        return self._to_domain(model)

    async def exists_by_nickname(
        self, nickname: str, exclude: UserId | None = None
    ) -> bool:
        """Check whether another user already uses the nickname."""
        condition = UserModel.nickname == nickname
        if exclude is not None:
            condition = condition & (UserModel.id != exclude.value)

        result = await self._session.execute(select(exists().where(condition)))
        return bool(result.scalar())

    async def update_last_login_at(self, user_id: UserId, at: datetime) -> None:
        """Set only the last_login_at column of a user."""
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id.value)
            .values(last_login_at=at)
            .execution_options(synchronize_session=False)
        )
        await self._session.execute(stmt)
        self._probe.last_login_updated(user_id.value)

    async def decrement_quota(self, user_id: UserId) -> int:
        """Atomically consume one unit of quota.

        Args:
            user_id: The user sending a letter

        Returns:
            The remaining quota

        Raises:
            QuotaExceededError: If the quota was already zero
            UserNotFoundError: If the user does not exist
        """
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id.value, UserModel.quota > 0)
            .values(quota=UserModel.quota - 1)
            .returning(UserModel.quota)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        remaining = result.scalar_one_or_none()

        if remaining is None:
            found = await self._session.execute(
                select(exists().where(UserModel.id == user_id.value))
            )
            if not found.scalar():
                self._probe.user_not_found(user_id.value)
                raise UserNotFoundError(f"User {user_id.value} does not exist")

            self._probe.quota_exhausted(user_id.value)
            raise QuotaExceededError(f"User {user_id.value} has no quota left")

        self._probe.quota_decremented(user_id.value, remaining)
        return remaining

    @staticmethod
    def _to_domain(model: UserModel) -> User:
        return User(
            id=UserId(value=model.id),
            identity=ProviderIdentity(
                provider=OAuthProvider(model.provider),
                provider_id=model.provider_id,
            ),
            email=model.email,
            nickname=model.nickname,
            birth_year=model.birth_year,
            created_at=model.signed_up_at,
            last_login_at=model.last_login_at,
            quota=model.quota,
            role=UserRole(model.role) if model.role else None,
            bird_id=BirdId(value=model.bird_id) if model.bird_id else None,
            category_id=(
                CategoryId(value=model.category_id) if model.category_id else None
            ),
            refresh_token=model.refresh_token,
        )
