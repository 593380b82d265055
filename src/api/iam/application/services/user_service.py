"""User application service for IAM bounded context.

Handles registration after sign-up (nickname, role, bird, category),
nickname availability checks and reference-data listings.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import DefaultUserServiceProbe, UserServiceProbe
from iam.application.value_objects import RegistrationDetails
from iam.domain.aggregates import Bird, Category, User
from iam.domain.value_objects import UserId, UserRole
from iam.ports.exceptions import (
    BirdNotFoundError,
    CategoryNotFoundError,
    DuplicateNicknameError,
    UserNotFoundError,
)
from iam.ports.repositories import (
    IBirdRepository,
    ICategoryRepository,
    IUserRepository,
)


class UserService:
    """Application service for user management."""

    def __init__(
        self,
        session: AsyncSession,
        user_repository: IUserRepository,
        bird_repository: IBirdRepository,
        category_repository: ICategoryRepository,
        probe: UserServiceProbe | None = None,
    ):
        """Initialize UserService with dependencies.

        Args:
            session: Database session for transaction management
            user_repository: Repository for user persistence
            bird_repository: Lookup for bird avatars
            category_repository: Lookup for mentoring categories
            probe: Optional domain probe for observability
        """
        self._session = session
        self._user_repository = user_repository
        self._bird_repository = bird_repository
        self._category_repository = category_repository
        self._probe = probe or DefaultUserServiceProbe()

    async def get_user(self, user_id: UserId) -> User:
        """Get a user by ID.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        user = await self._user_repository.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(f"User {user_id.value} does not exist")
        return user

    async def is_nickname_available(self, nickname: str) -> bool:
        """Check whether a nickname can still be chosen.

        Blank nicknames are never available.
        """
        nickname = nickname.strip()
        if not nickname:
            return False

        available = not await self._user_repository.exists_by_nickname(nickname)
        self._probe.nickname_checked(nickname, available)
        return available

    async def complete_registration(
        self, user_id: UserId, details: RegistrationDetails
    ) -> User:
        """Assign nickname, role, bird and category to a signed-up user.

        Manages database transaction for the entire use case.

        Args:
            user_id: The registering user
            details: The choices the user made

        Returns:
            The updated User aggregate

        Raises:
            UserNotFoundError: If the user does not exist
            RoleNotFoundError: If the role name is unknown
            BirdNotFoundError: If the bird name is unknown
            CategoryNotFoundError: If the category name is unknown
            DuplicateNicknameError: If another user has the nickname
            RoleAlreadyAssignedError: If the user already registered
            ValueError: If the nickname is blank
        """
        try:
            role = UserRole.from_name(details.role_name)
            nickname = details.nickname.strip()
            if not nickname:
                raise ValueError("A nickname is required to complete registration")

            async with self._session.begin():
                user = await self._user_repository.get_by_id(user_id)
                if user is None:
                    raise UserNotFoundError(f"User {user_id.value} does not exist")

                bird = await self._bird_repository.get_by_name(details.bird_name)
                if bird is None:
                    raise BirdNotFoundError(
                        f"Bird '{details.bird_name}' does not exist"
                    )

                category = await self._category_repository.get_by_name(
                    details.category_name
                )
                if category is None:
                    raise CategoryNotFoundError(
                        f"Category '{details.category_name}' does not exist"
                    )

                if await self._user_repository.exists_by_nickname(
                    nickname, exclude=user_id
                ):
                    raise DuplicateNicknameError(
                        f"Nickname '{nickname}' is already taken"
                    )

                user.complete_registration(
                    nickname=nickname,
                    role=role,
                    bird_id=bird.id,
                    category_id=category.id,
                )
                await self._user_repository.save(user)

            self._probe.registration_completed(
                user_id=user_id.value,
                role=role.value,
                category=category.name,
            )
            return user

        except Exception as e:
            self._probe.registration_failed(user_id=user_id.value, error=str(e))
            raise

    async def list_birds(self) -> list[Bird]:
        """List the bird avatars users can choose from."""
        return await self._bird_repository.list_all()

    async def list_categories(self) -> list[Category]:
        """List the mentoring categories users can choose from."""
        return await self._category_repository.list_all()
