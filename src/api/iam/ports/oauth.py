"""OAuth provider client port for the sign-up/login flow."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from iam.domain.value_objects import ProviderIdentity


@dataclass(frozen=True)
class OAuthProfile:
    """Profile attributes fetched from the provider with an access token."""

    identity: ProviderIdentity
    email: str | None = None
    nickname: str | None = None
    birth_year: int | None = None


@runtime_checkable
class IOAuthProviderClient(Protocol):
    """Client for an OAuth 2.0 authorization-code provider."""

    async def exchange_code_for_token(self, code: str) -> str:
        """Exchange an authorization code for a provider access token.

        Raises:
            InvalidAuthorizationCodeError: If the provider rejects the code
            ProviderUnavailableError: If the provider cannot be reached
        """
        ...

    async def fetch_profile(self, access_token: str) -> OAuthProfile:
        """Fetch the profile of the user the token belongs to.

        Raises:
            InvalidAuthorizationCodeError: If the provider rejects the token
            ProviderUnavailableError: If the provider cannot be reached
            MalformedProfileError: If the payload lacks a provider user id
        """
        ...
