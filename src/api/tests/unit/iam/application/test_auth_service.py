"""Unit tests for AuthService."""

from unittest.mock import create_autospec

import pytest

from iam.application.observability import AuthenticationProbe
from iam.application.services import AuthService
from iam.application.value_objects import AuthOutcome
from iam.domain.value_objects import OAuthProvider, ProviderIdentity
from iam.ports.exceptions import (
    InvalidAuthorizationCodeError,
    ProviderUnavailableError,
)
from iam.ports.oauth import IOAuthProviderClient, OAuthProfile
from iam.ports.repositories import IUserRepository


@pytest.fixture
def profile():
    return OAuthProfile(
        identity=ProviderIdentity(provider=OAuthProvider.KAKAO, provider_id="12345"),
        email="m@example.com",
        nickname="sparrow",
        birth_year=2001,
    )


@pytest.fixture
def mock_oauth_client(profile):
    client = create_autospec(IOAuthProviderClient, instance=True)
    client.exchange_code_for_token.return_value = "access-token"
    client.fetch_profile.return_value = profile
    return client


@pytest.fixture
def mock_user_repository():
    return create_autospec(IUserRepository, instance=True)


@pytest.fixture
def mock_probe():
    return create_autospec(AuthenticationProbe, instance=True)


@pytest.fixture
def auth_service(mock_session, mock_user_repository, mock_oauth_client, mock_probe):
    return AuthService(
        session=mock_session,
        user_repository=mock_user_repository,
        oauth_client=mock_oauth_client,
        default_quota=3,
        probe=mock_probe,
    )


class TestAuthenticate:
    """Tests for the sign-up/login flow."""

    @pytest.mark.asyncio
    async def test_unseen_identity_signs_up(
        self,
        auth_service,
        profile,
        mock_oauth_client,
        mock_user_repository,
        mock_probe,
    ):
        mock_user_repository.get_by_provider_identity.return_value = None

        result = await auth_service.authenticate("code-1")

        assert result.outcome == AuthOutcome.SIGNUP
        assert result.is_new_user
        user = result.user
        assert user.identity == profile.identity
        assert user.nickname == "sparrow"
        assert user.birth_year == 2001
        assert user.quota == 3
        assert user.created_at == user.last_login_at
        mock_oauth_client.exchange_code_for_token.assert_awaited_once_with("code-1")
        mock_oauth_client.fetch_profile.assert_awaited_once_with("access-token")
        mock_user_repository.save.assert_awaited_once_with(user)
        mock_user_repository.update_last_login_at.assert_not_called()
        mock_probe.user_signed_up.assert_called_once_with(user.id.value, "kakao")

    @pytest.mark.asyncio
    async def test_known_identity_logs_in(
        self,
        auth_service,
        make_user,
        mock_user_repository,
        mock_probe,
    ):
        existing = make_user()
        previous_login = existing.last_login_at
        mock_user_repository.get_by_provider_identity.return_value = existing

        result = await auth_service.authenticate("code-2")

        assert result.outcome == AuthOutcome.LOGIN
        assert not result.is_new_user
        assert result.user is existing
        assert existing.last_login_at > previous_login
        mock_user_repository.save.assert_not_called()
        mock_user_repository.update_last_login_at.assert_awaited_once_with(
            existing.id, existing.last_login_at
        )
        mock_probe.user_logged_in.assert_called_once()

    @pytest.mark.asyncio
    async def test_rejected_code_propagates(
        self,
        auth_service,
        mock_session,
        mock_oauth_client,
        mock_user_repository,
        mock_probe,
    ):
        mock_oauth_client.exchange_code_for_token.side_effect = (
            InvalidAuthorizationCodeError("bad code")
        )

        with pytest.raises(InvalidAuthorizationCodeError):
            await auth_service.authenticate("bad")

        mock_session.begin.assert_not_called()
        mock_user_repository.get_by_provider_identity.assert_not_called()
        mock_probe.authentication_failed.assert_called_once_with(
            "InvalidAuthorizationCodeError", "bad code"
        )

    @pytest.mark.asyncio
    async def test_provider_outage_is_not_retried(
        self, auth_service, mock_oauth_client
    ):
        mock_oauth_client.fetch_profile.side_effect = ProviderUnavailableError("down")

        with pytest.raises(ProviderUnavailableError):
            await auth_service.authenticate("code")

        assert mock_oauth_client.fetch_profile.await_count == 1
