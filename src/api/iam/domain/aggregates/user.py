"""User aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from iam.domain.value_objects import (
    BirdId,
    CategoryId,
    ProviderIdentity,
    UserId,
    UserRole,
)


@dataclass
class User:
    """User aggregate representing a mentee or mentor.

    Users are created from an OAuth provider profile on first sign-in and
    complete their registration (nickname, role, bird, category) afterwards.

    Business rules:
    - (provider, provider_id) identifies a user uniquely
    - The role is assigned once and never changes
    - Quota is the number of letters the user may still send; sending a
      letter consumes one unit and the quota never goes below zero
    """

    id: UserId
    identity: ProviderIdentity
    email: str | None
    nickname: str | None
    birth_year: int | None
    created_at: datetime
    last_login_at: datetime
    quota: int = 0
    role: UserRole | None = None
    bird_id: BirdId | None = None
    category_id: CategoryId | None = None
    refresh_token: str | None = None

    @classmethod
    def sign_up(
        cls,
        identity: ProviderIdentity,
        email: str | None,
        nickname: str | None,
        birth_year: int | None,
        quota: int,
        now: datetime | None = None,
    ) -> User:
        """Factory method for a user signing in for the first time.

        Both created_at and last_login_at are set to ``now``.

        Args:
            identity: Provider identity the user authenticated with
            email: Email reported by the provider, if shared
            nickname: Nickname reported by the provider, if shared
            birth_year: Birth year reported by the provider, if shared
            quota: Initial letter quota
            now: Sign-up instant (defaults to the current UTC time)

        Returns:
            A new User aggregate without a role
        """
        now = now or datetime.now(UTC)
        return cls(
            id=UserId.generate(),
            identity=identity,
            email=email,
            nickname=nickname,
            birth_year=birth_year,
            created_at=now,
            last_login_at=now,
            quota=quota,
        )

    def record_login(self, now: datetime | None = None) -> None:
        """Record a successful login."""
        self.last_login_at = now or datetime.now(UTC)

    def complete_registration(
        self,
        nickname: str,
        role: UserRole,
        bird_id: BirdId,
        category_id: CategoryId,
    ) -> None:
        """Fill in the details chosen by the user after sign-up.

        Raises:
            RoleAlreadyAssignedError: If the user already has a role
        """
        from iam.ports.exceptions import RoleAlreadyAssignedError

        if self.role is not None:
            raise RoleAlreadyAssignedError(
                f"User {self.id.value} is already registered as {self.role.value}"
            )

        self.nickname = nickname
        self.role = role
        self.bird_id = bird_id
        self.category_id = category_id

    @property
    def is_mentee(self) -> bool:
        """Check if the user writes letters."""
        return self.role == UserRole.MENTEE

    @property
    def is_mentor(self) -> bool:
        """Check if the user answers letters."""
        return self.role == UserRole.MENTOR

    def has_quota(self) -> bool:
        """Check if the user may still send a letter."""
        return self.quota > 0

    def __str__(self) -> str:
        """Return string representation."""
        return f"User({self.nickname or self.identity})"

    def __eq__(self, other: object) -> bool:
        """Users are equal if they have the same ID (identity-based equality)."""
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)
