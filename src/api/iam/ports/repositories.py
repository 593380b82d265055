"""Repository protocols (ports) for IAM bounded context.

Repository protocols define the interface for persisting and retrieving
aggregates. Implementations never open transactions; the application
service that calls them owns the transaction boundary.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable

from iam.domain.aggregates import Bird, Category, User
from iam.domain.value_objects import ProviderIdentity, UserId


@runtime_checkable
class IUserRepository(Protocol):
    """Repository for User aggregate persistence.

    Besides whole-aggregate saves it exposes the targeted partial updates
    the mailbox needs (last login, quota) so that concurrent requests do not
    overwrite each other's columns.
    """

    async def save(self, user: User) -> None:
        """Persist a user aggregate.

        Creates a new user or updates an existing one. Updates never write
        quota or last_login_at, which have their own targeted operations.

        Args:
            user: The User aggregate to persist

        Raises:
            DuplicateProviderIdentityError: If another user already holds
                the same (provider, provider_id)
        """
        ...

    async def get_by_id(self, user_id: UserId) -> User | None:
        """Retrieve a user by their ID.

        Args:
            user_id: The unique identifier of the user

        Returns:
            The User aggregate, or None if not found
        """
        ...

    async def get_by_provider_identity(
        self, identity: ProviderIdentity
    ) -> User | None:
        """Retrieve a user by the provider identity they signed up with.

        Args:
            identity: The (provider, provider_id) pair

        Returns:
            The User aggregate, or None if the identity was never seen
        """
        ...

    async def exists_by_nickname(
        self, nickname: str, exclude: UserId | None = None
    ) -> bool:
        """Check whether a nickname is already taken.

        Args:
            nickname: The nickname to look for
            exclude: A user whose own nickname should not count

        Returns:
            True if another user uses the nickname
        """
        ...

    async def update_last_login_at(self, user_id: UserId, at: datetime) -> None:
        """Set only the last_login_at column of a user."""
        ...

    async def decrement_quota(self, user_id: UserId) -> int:
        """Atomically consume one unit of a user's quota.

        Implemented as a compare-and-decrement, so two concurrent calls can
        never drive the quota below zero.

        Args:
            user_id: The user sending a letter

        Returns:
            The remaining quota after the decrement

        Raises:
            QuotaExceededError: If the quota was already zero
            UserNotFoundError: If the user does not exist
        """
        ...


@runtime_checkable
class IBirdRepository(Protocol):
    """Read-only repository for bird avatars."""

    async def get_by_name(self, name: str) -> Bird | None:
        """Retrieve a bird by its unique name."""
        ...

    async def list_all(self) -> list[Bird]:
        """List every bird ordered by name."""
        ...


@runtime_checkable
class ICategoryRepository(Protocol):
    """Read-only repository for mentoring categories."""

    async def get_by_name(self, name: str) -> Category | None:
        """Retrieve a category by its unique name."""
        ...

    async def list_all(self) -> list[Category]:
        """List every category ordered by name."""
        ...
