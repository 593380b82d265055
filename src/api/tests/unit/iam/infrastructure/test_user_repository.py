"""Unit tests for UserRepository.

Tests verify repository behavior with a mocked session.
"""

from datetime import UTC, datetime
from unittest.mock import MagicMock, create_autospec

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError

from iam.domain.value_objects import (
    BirdId,
    CategoryId,
    OAuthProvider,
    ProviderIdentity,
    UserId,
    UserRole,
)
from iam.infrastructure.models import UserModel
from iam.infrastructure.observability import UserRepositoryProbe
from iam.infrastructure.user_repository import UserRepository
from iam.ports.exceptions import (
    DuplicateProviderIdentityError,
    QuotaExceededError,
    UserNotFoundError,
)
from iam.ports.repositories import IUserRepository


@pytest.fixture
def mock_probe():
    return create_autospec(UserRepositoryProbe, instance=True)


@pytest.fixture
def repository(mock_session, mock_probe):
    """Create repository with mock session."""
    return UserRepository(session=mock_session, probe=mock_probe)


def user_model(**overrides) -> UserModel:
    now = datetime(2024, 3, 1, tzinfo=UTC)
    values = dict(
        id=UserId.generate().value,
        provider="kakao",
        provider_id="12345",
        email=None,
        nickname="owl",
        birth_year=1990,
        role="MENTOR",
        bird_id=None,
        category_id=None,
        quota=5,
        signed_up_at=now,
        last_login_at=now,
        refresh_token=None,
    )
    values.update(overrides)
    return UserModel(**values)


def scalar_result(value) -> MagicMock:
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    result.scalar.return_value = value
    return result


class TestProtocolCompliance:
    def test_implements_protocol(self, repository):
        assert isinstance(repository, IUserRepository)


class TestSave:
    @pytest.mark.asyncio
    async def test_adds_new_user(self, repository, mock_session, make_user):
        user = make_user(role=UserRole.MENTEE, quota=3)
        mock_session.execute.return_value = scalar_result(None)

        await repository.save(user)

        model = mock_session.add.call_args[0][0]
        assert isinstance(model, UserModel)
        assert model.id == user.id.value
        assert model.provider == "kakao"
        assert model.role == "MENTEE"
        assert model.quota == 3
        mock_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_updates_existing_user(self, repository, mock_session, make_user):
        user = make_user(nickname="renamed")
        existing = user_model(id=user.id.value, nickname="old")
        mock_session.execute.return_value = scalar_result(existing)

        await repository.save(user)

        mock_session.add.assert_not_called()
        assert existing.nickname == "renamed"

    @pytest.mark.asyncio
    async def test_update_keeps_concurrently_changed_counters(
        self, repository, mock_session, make_user
    ):
        user = make_user(role=None, nickname=None, quota=3)
        user.complete_registration(
            nickname="owl",
            role=UserRole.MENTOR,
            bird_id=BirdId.generate(),
            category_id=CategoryId.generate(),
        )
        user.record_login(datetime(2024, 4, 1, tzinfo=UTC))
        # another transaction already consumed one letter
        existing = user_model(id=user.id.value, role=None, quota=2)
        stored_login = existing.last_login_at
        mock_session.execute.return_value = scalar_result(existing)

        await repository.save(user)

        assert existing.role == "MENTOR"
        assert existing.nickname == "owl"
        assert existing.quota == 2
        assert existing.last_login_at == stored_login

    @pytest.mark.asyncio
    async def test_duplicate_identity_is_translated(
        self, repository, mock_session, make_user, mock_probe
    ):
        mock_session.execute.return_value = scalar_result(None)
        mock_session.flush.side_effect = IntegrityError(
            "INSERT", {}, Exception('violates "uq_users_provider_provider_id"')
        )

        with pytest.raises(DuplicateProviderIdentityError):
            await repository.save(make_user())

        mock_probe.duplicate_provider_identity.assert_called_once()


class TestLookups:
    @pytest.mark.asyncio
    async def test_get_by_id_not_found(self, repository, mock_session, mock_probe):
        mock_session.execute.return_value = scalar_result(None)

        assert await repository.get_by_id(UserId.generate()) is None
        mock_probe.user_not_found.assert_called_once()

    @pytest.mark.asyncio
    async def test_get_by_provider_identity_maps_model(self, repository, mock_session):
        model = user_model()
        mock_session.execute.return_value = scalar_result(model)

        user = await repository.get_by_provider_identity(
            ProviderIdentity(OAuthProvider.KAKAO, "12345")
        )

        assert user.id.value == model.id
        assert user.role == UserRole.MENTOR
        assert user.identity.provider == OAuthProvider.KAKAO
        assert user.created_at == model.signed_up_at

    @pytest.mark.asyncio
    async def test_exists_by_nickname_excludes_user(self, repository, mock_session):
        mock_session.execute.return_value = scalar_result(True)
        user_id = UserId.generate()

        assert await repository.exists_by_nickname("owl", exclude=user_id) is True

        statement = mock_session.execute.call_args[0][0]
        sql = str(statement.compile(dialect=postgresql.dialect()))
        assert "EXISTS" in sql
        assert "users.id != " in sql


class TestUpdateLastLoginAt:
    @pytest.mark.asyncio
    async def test_targeted_update(self, repository, mock_session):
        await repository.update_last_login_at(
            UserId.generate(), datetime(2024, 3, 5, tzinfo=UTC)
        )

        statement = mock_session.execute.call_args[0][0]
        sql = str(statement.compile(dialect=postgresql.dialect()))
        assert sql.startswith("UPDATE users SET")
        assert "last_login_at=%(last_login_at)s" in sql
        assert "quota" not in sql


class TestDecrementQuota:
    @pytest.mark.asyncio
    async def test_returns_remaining_quota(self, repository, mock_session, mock_probe):
        mock_session.execute.return_value = scalar_result(2)
        user_id = UserId.generate()

        assert await repository.decrement_quota(user_id) == 2

        statement = mock_session.execute.call_args[0][0]
        sql = str(statement.compile(dialect=postgresql.dialect()))
        assert "quota=(users.quota - " in sql
        assert "users.quota > " in sql
        assert "RETURNING users.quota" in sql
        mock_probe.quota_decremented.assert_called_once_with(user_id.value, 2)

    @pytest.mark.asyncio
    async def test_zero_quota_raises(self, repository, mock_session, mock_probe):
        mock_session.execute.side_effect = [scalar_result(None), scalar_result(True)]

        with pytest.raises(QuotaExceededError):
            await repository.decrement_quota(UserId.generate())

        mock_probe.quota_exhausted.assert_called_once()

    @pytest.mark.asyncio
    async def test_unknown_user_raises(self, repository, mock_session):
        mock_session.execute.side_effect = [scalar_result(None), scalar_result(False)]

        with pytest.raises(UserNotFoundError):
            await repository.decrement_quota(UserId.generate())
