"""Value objects for the IAM domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from shared_kernel.identifiers import UlidIdentifier


@dataclass(frozen=True)
class UserId(UlidIdentifier):
    """Identifier for a User aggregate."""


@dataclass(frozen=True)
class BirdId(UlidIdentifier):
    """Identifier for a Bird avatar."""


@dataclass(frozen=True)
class CategoryId(UlidIdentifier):
    """Identifier for a mentoring Category."""


class UserRole(StrEnum):
    """Closed set of roles a user can take in the mailbox.

    Mentees write letters; mentors receive, answer or throw them.
    """

    MENTEE = "MENTEE"
    MENTOR = "MENTOR"

    @classmethod
    def from_name(cls, name: str) -> UserRole:
        """Resolve a role by its name, case-insensitively.

        Raises:
            RoleNotFoundError: If no role has that name
        """
        from iam.ports.exceptions import RoleNotFoundError

        try:
            return cls(name.strip().upper())
        except ValueError as e:
            raise RoleNotFoundError(f"Role '{name}' does not exist") from e


class OAuthProvider(StrEnum):
    """Identity providers users can sign in with."""

    KAKAO = "kakao"


@dataclass(frozen=True)
class ProviderIdentity:
    """The (provider, provider user id) pair that uniquely identifies a user."""

    provider: OAuthProvider
    provider_id: str

    def __str__(self) -> str:
        """Return string representation."""
        return f"{self.provider.value}:{self.provider_id}"
