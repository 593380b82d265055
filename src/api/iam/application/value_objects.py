"""Application-layer value objects for IAM bounded context.

These represent use-case inputs and outcomes rather than core business
entities.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from iam.domain.aggregates import User


class AuthOutcome(StrEnum):
    """Whether an authentication created a user or logged one in."""

    SIGNUP = "signup"
    LOGIN = "login"


@dataclass(frozen=True)
class AuthenticationResult:
    """Result of exchanging an authorization code.

    Session or token issuance happens in an external session layer, which
    receives this result.
    """

    outcome: AuthOutcome
    user: User

    @property
    def is_new_user(self) -> bool:
        """True when the authentication created the user."""
        return self.outcome == AuthOutcome.SIGNUP


@dataclass(frozen=True)
class RegistrationDetails:
    """Details a user chooses right after signing up."""

    nickname: str
    role_name: str
    bird_name: str
    category_name: str
