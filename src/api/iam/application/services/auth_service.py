"""Authentication application service for IAM bounded context.

Turns an OAuth authorization code into a local user: sign-up for provider
identities never seen before, login for known ones.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    AuthenticationProbe,
    DefaultAuthenticationProbe,
)
from iam.application.value_objects import AuthenticationResult, AuthOutcome
from iam.domain.aggregates import User
from iam.ports.exceptions import AuthError
from iam.ports.oauth import IOAuthProviderClient
from iam.ports.repositories import IUserRepository


class AuthService:
    """Application service for the OAuth sign-up/login flow."""

    def __init__(
        self,
        session: AsyncSession,
        user_repository: IUserRepository,
        oauth_client: IOAuthProviderClient,
        default_quota: int,
        probe: AuthenticationProbe | None = None,
    ):
        """Initialize AuthService with dependencies.

        Args:
            session: Database session for transaction management
            user_repository: Repository for user persistence
            oauth_client: Client for the OAuth provider
            default_quota: Letter quota granted on sign-up
            probe: Optional domain probe for observability
        """
        self._session = session
        self._user_repository = user_repository
        self._oauth_client = oauth_client
        self._default_quota = default_quota
        self._probe = probe or DefaultAuthenticationProbe()

    async def authenticate(self, code: str) -> AuthenticationResult:
        """Exchange an authorization code and sign the user up or in.

        The provider is called before the transaction opens, so no database
        connection is held while waiting on the network.

        Args:
            code: Authorization code returned to the redirect URI

        Returns:
            SIGNUP with the new user, or LOGIN with the existing one

        Raises:
            InvalidAuthorizationCodeError: If the provider rejects the code
            ProviderUnavailableError: If the provider cannot be reached
            MalformedProfileError: If the profile lacks a user id
            DuplicateProviderIdentityError: If a concurrent sign-up for the
                same identity committed first
        """
        try:
            access_token = await self._oauth_client.exchange_code_for_token(code)
            profile = await self._oauth_client.fetch_profile(access_token)
        except AuthError as e:
            self._probe.authentication_failed(type(e).__name__, str(e))
            raise

        now = datetime.now(UTC)
        async with self._session.begin():
            user = await self._user_repository.get_by_provider_identity(
                profile.identity
            )

            if user is None:
                user = User.sign_up(
                    identity=profile.identity,
                    email=profile.email,
                    nickname=profile.nickname,
                    birth_year=profile.birth_year,
                    quota=self._default_quota,
                    now=now,
                )
                await self._user_repository.save(user)
                outcome = AuthOutcome.SIGNUP
            else:
                user.record_login(now)
                await self._user_repository.update_last_login_at(user.id, now)
                outcome = AuthOutcome.LOGIN

        if outcome == AuthOutcome.SIGNUP:
            self._probe.user_signed_up(user.id.value, user.identity.provider.value)
        else:
            self._probe.user_logged_in(user.id.value, user.identity.provider.value)

        return AuthenticationResult(outcome=outcome, user=user)
