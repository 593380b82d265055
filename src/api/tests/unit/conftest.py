"""Unit test fixtures with mocked dependencies."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from iam.domain.aggregates import User
from iam.domain.value_objects import OAuthProvider, ProviderIdentity, UserId, UserRole
from letters.domain.aggregates import Letter, LetterStatus


@pytest.fixture
def mock_session():
    """Create mock async session.

    ``begin()`` returns an async context manager, as on a real AsyncSession.
    """
    session = AsyncMock()
    session.begin = MagicMock(return_value=AsyncMock())
    session.add = MagicMock()
    return session


@pytest.fixture
def make_user():
    """Factory for User aggregates with a given role."""

    def _make(
        role: UserRole | None = UserRole.MENTEE,
        nickname: str | None = "sparrow",
        quota: int = 3,
    ) -> User:
        now = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)
        user_id = UserId.generate()
        return User(
            id=user_id,
            identity=ProviderIdentity(
                provider=OAuthProvider.KAKAO, provider_id=user_id.value.lower()
            ),
            email=None,
            nickname=nickname,
            birth_year=None,
            created_at=now,
            last_login_at=now,
            quota=quota,
            role=role,
        )

    return _make


@pytest.fixture
def make_letter_status():
    """Factory for LetterStatus threads between two users."""

    def _make(
        mentee_id: UserId | None = None,
        mentor_id: UserId | None = None,
        category_name: str = "career",
        replied: bool = False,
    ) -> LetterStatus:
        mentee_letter = Letter.write(category_name, "Which path?", "I am unsure.")
        status = LetterStatus.open(
            mentee_letter=mentee_letter,
            mentee_id=mentee_id or UserId.generate(),
            mentor_id=mentor_id or UserId.generate(),
        )
        if replied:
            status.attach_reply(mentee_letter.reply("Re: Which path?", "Good luck"))
        return status

    return _make
