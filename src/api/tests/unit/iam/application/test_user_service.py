"""Unit tests for UserService."""

from unittest.mock import create_autospec

import pytest

from iam.application.observability import UserServiceProbe
from iam.application.services import UserService
from iam.application.value_objects import RegistrationDetails
from iam.domain.aggregates import Bird, Category
from iam.domain.value_objects import BirdId, CategoryId, UserId, UserRole
from iam.ports.exceptions import (
    BirdNotFoundError,
    CategoryNotFoundError,
    DuplicateNicknameError,
    RoleAlreadyAssignedError,
    RoleNotFoundError,
    UserNotFoundError,
)
from iam.ports.repositories import (
    IBirdRepository,
    ICategoryRepository,
    IUserRepository,
)


@pytest.fixture
def mock_user_repository():
    return create_autospec(IUserRepository, instance=True)


@pytest.fixture
def mock_bird_repository():
    repository = create_autospec(IBirdRepository, instance=True)
    repository.get_by_name.return_value = Bird(id=BirdId.generate(), name="owl")
    return repository


@pytest.fixture
def mock_category_repository():
    repository = create_autospec(ICategoryRepository, instance=True)
    repository.get_by_name.return_value = Category(
        id=CategoryId.generate(), name="career"
    )
    return repository


@pytest.fixture
def mock_probe():
    return create_autospec(UserServiceProbe, instance=True)


@pytest.fixture
def user_service(
    mock_session,
    mock_user_repository,
    mock_bird_repository,
    mock_category_repository,
    mock_probe,
):
    return UserService(
        session=mock_session,
        user_repository=mock_user_repository,
        bird_repository=mock_bird_repository,
        category_repository=mock_category_repository,
        probe=mock_probe,
    )


@pytest.fixture
def details():
    return RegistrationDetails(
        nickname=" owl ", role_name="mentor", bird_name="owl", category_name="career"
    )


class TestGetUser:
    @pytest.mark.asyncio
    async def test_missing_user(self, user_service, mock_user_repository):
        mock_user_repository.get_by_id.return_value = None

        with pytest.raises(UserNotFoundError):
            await user_service.get_user(UserId.generate())


class TestIsNicknameAvailable:
    @pytest.mark.asyncio
    async def test_free_nickname(self, user_service, mock_user_repository, mock_probe):
        mock_user_repository.exists_by_nickname.return_value = False

        assert await user_service.is_nickname_available("owl") is True
        mock_probe.nickname_checked.assert_called_once_with("owl", True)

    @pytest.mark.asyncio
    async def test_taken_nickname(self, user_service, mock_user_repository):
        mock_user_repository.exists_by_nickname.return_value = True

        assert await user_service.is_nickname_available("owl") is False

    @pytest.mark.asyncio
    async def test_blank_nickname_is_never_available(
        self, user_service, mock_user_repository
    ):
        assert await user_service.is_nickname_available("   ") is False
        mock_user_repository.exists_by_nickname.assert_not_called()


class TestCompleteRegistration:
    @pytest.mark.asyncio
    async def test_assigns_everything(
        self,
        user_service,
        details,
        make_user,
        mock_user_repository,
        mock_bird_repository,
        mock_category_repository,
        mock_probe,
    ):
        user = make_user(role=None, nickname=None)
        mock_user_repository.get_by_id.return_value = user
        mock_user_repository.exists_by_nickname.return_value = False

        result = await user_service.complete_registration(user.id, details)

        assert result.role == UserRole.MENTOR
        assert result.nickname == "owl"
        assert result.bird_id == mock_bird_repository.get_by_name.return_value.id
        assert (
            result.category_id == mock_category_repository.get_by_name.return_value.id
        )
        mock_user_repository.exists_by_nickname.assert_awaited_once_with(
            "owl", exclude=user.id
        )
        mock_user_repository.save.assert_awaited_once_with(user)
        mock_probe.registration_completed.assert_called_once_with(
            user_id=user.id.value, role="MENTOR", category="career"
        )

    @pytest.mark.asyncio
    async def test_blank_nickname_is_rejected(
        self, user_service, make_user, mock_user_repository, mock_probe
    ):
        mock_user_repository.get_by_id.return_value = make_user(role=None)
        blank = RegistrationDetails("   ", "MENTEE", "owl", "career")

        assert await user_service.is_nickname_available(blank.nickname) is False
        with pytest.raises(ValueError):
            await user_service.complete_registration(UserId.generate(), blank)

        mock_user_repository.save.assert_not_called()
        mock_probe.registration_failed.assert_called_once()

    @pytest.mark.asyncio
    async def test_unknown_role(self, user_service, details, mock_probe):
        bad = RegistrationDetails("owl", "ADMIN", "owl", "career")

        with pytest.raises(RoleNotFoundError):
            await user_service.complete_registration(UserId.generate(), bad)

        mock_probe.registration_failed.assert_called_once()

    @pytest.mark.asyncio
    async def test_unknown_bird(
        self, user_service, details, make_user, mock_user_repository,
        mock_bird_repository,
    ):
        mock_user_repository.get_by_id.return_value = make_user(role=None)
        mock_bird_repository.get_by_name.return_value = None

        with pytest.raises(BirdNotFoundError):
            await user_service.complete_registration(UserId.generate(), details)

    @pytest.mark.asyncio
    async def test_unknown_category(
        self, user_service, details, make_user, mock_user_repository,
        mock_category_repository,
    ):
        mock_user_repository.get_by_id.return_value = make_user(role=None)
        mock_category_repository.get_by_name.return_value = None

        with pytest.raises(CategoryNotFoundError):
            await user_service.complete_registration(UserId.generate(), details)

    @pytest.mark.asyncio
    async def test_nickname_taken_by_someone_else(
        self, user_service, details, make_user, mock_user_repository
    ):
        mock_user_repository.get_by_id.return_value = make_user(role=None)
        mock_user_repository.exists_by_nickname.return_value = True

        with pytest.raises(DuplicateNicknameError):
            await user_service.complete_registration(UserId.generate(), details)

        mock_user_repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_role_cannot_change(
        self, user_service, details, make_user, mock_user_repository
    ):
        mock_user_repository.get_by_id.return_value = make_user(role=UserRole.MENTEE)
        mock_user_repository.exists_by_nickname.return_value = False

        with pytest.raises(RoleAlreadyAssignedError):
            await user_service.complete_registration(UserId.generate(), details)

        mock_user_repository.save.assert_not_called()


class TestReferenceData:
    @pytest.mark.asyncio
    async def test_lists_birds_and_categories(
        self, user_service, mock_bird_repository, mock_category_repository
    ):
        birds = [Bird(id=BirdId.generate(), name="owl")]
        categories = [Category(id=CategoryId.generate(), name="career")]
        mock_bird_repository.list_all.return_value = birds
        mock_category_repository.list_all.return_value = categories

        assert await user_service.list_birds() == birds
        assert await user_service.list_categories() == categories
