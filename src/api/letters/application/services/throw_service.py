"""Throw application service for the letters bounded context.

A mentor who does not want to answer a letter "throws" it: the throw is
recorded for audit, the category tally grows by one and the thread is routed
to another mentor. Throwing never touches the letters or the flags of the
thread.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.value_objects import UserId
from iam.ports.exceptions import InvalidMentorError, UserNotFoundError
from iam.ports.repositories import IUserRepository
from letters.application.observability import (
    DefaultThrowServiceProbe,
    ThrowServiceProbe,
)
from letters.domain.aggregates import LetterStatus, ThrowLetter, ThrowLetterCategory
from letters.domain.value_objects import LetterStatusId
from letters.ports.exceptions import LetterStatusNotFoundError
from letters.ports.repositories import (
    ILetterStatusRepository,
    IThrowLetterCategoryRepository,
    IThrowLetterRepository,
)


class ThrowService:
    """Application service for throwing and re-routing letters."""

    def __init__(
        self,
        session: AsyncSession,
        letter_status_repository: ILetterStatusRepository,
        throw_letter_repository: IThrowLetterRepository,
        category_repository: IThrowLetterCategoryRepository,
        user_repository: IUserRepository,
        probe: ThrowServiceProbe | None = None,
    ):
        """Initialize ThrowService with dependencies.

        Args:
            session: Database session for transaction management
            letter_status_repository: Repository for letter threads
            throw_letter_repository: Append-only store of throw records
            category_repository: Tally of thrown letters per category
            user_repository: Lookup for the mentor a thread is routed to
            probe: Optional domain probe for observability
        """
        self._session = session
        self._letter_status_repository = letter_status_repository
        self._throw_letter_repository = throw_letter_repository
        self._category_repository = category_repository
        self._user_repository = user_repository
        self._probe = probe or DefaultThrowServiceProbe()

    async def throw_letter(self, letter_status_id: LetterStatusId) -> ThrowLetter:
        """Record a throw by the thread's current mentor.

        Raises:
            LetterStatusNotFoundError: If the thread does not exist
        """
        try:
            async with self._session.begin():
                letter_status = await self._load(letter_status_id)
                return await self._throw(letter_status)
        except Exception as e:
            self._probe.throw_failed(letter_status_id.value, str(e))
            raise

    async def reassign_mentor(
        self, letter_status_id: LetterStatusId, new_mentor_id: UserId
    ) -> LetterStatus:
        """Route a thread to another mentor.

        Raises:
            LetterStatusNotFoundError: If the thread does not exist
            UserNotFoundError: If the new mentor does not exist
            InvalidMentorError: If the new mentor is not a mentor, or is
                already the thread's mentor
        """
        try:
            async with self._session.begin():
                letter_status = await self._load(letter_status_id)
                await self._reassign(letter_status, new_mentor_id)
                return letter_status
        except Exception as e:
            self._probe.throw_failed(letter_status_id.value, str(e))
            raise

    async def throw_to_mentor(
        self, letter_status_id: LetterStatusId, new_mentor_id: UserId
    ) -> LetterStatus:
        """Throw a letter and route it to a new mentor in one transaction.

        Either both the throw and the reassignment happen, or neither does.

        Raises:
            LetterStatusNotFoundError: If the thread does not exist
            UserNotFoundError: If the new mentor does not exist
            InvalidMentorError: If the new mentor cannot receive the letter
        """
        try:
            async with self._session.begin():
                letter_status = await self._load(letter_status_id)
                await self._throw(letter_status)
                await self._reassign(letter_status, new_mentor_id)
                return letter_status
        except Exception as e:
            self._probe.throw_failed(letter_status_id.value, str(e))
            raise

    async def ensure_category_tally(self) -> None:
        """Create the category tally if it does not exist yet.

        Safe to call from several processes starting at once.
        """
        async with self._session.begin():
            await self._category_repository.ensure_exists()
        self._probe.category_tally_ensured()

    async def get_category_statistics(self) -> ThrowLetterCategory:
        """Read the number of thrown letters per category."""
        return await self._category_repository.get()

    async def _load(self, letter_status_id: LetterStatusId) -> LetterStatus:
        letter_status = await self._letter_status_repository.get_by_id(
            letter_status_id
        )
        if letter_status is None:
            raise LetterStatusNotFoundError(
                f"Letter status {letter_status_id.value} does not exist"
            )
        return letter_status

    async def _throw(self, letter_status: LetterStatus) -> ThrowLetter:
        throw_letter = ThrowLetter.record(
            letter_status_id=letter_status.id,
            thrown_by=letter_status.mentor_id,
            now=datetime.now(UTC),
        )
        await self._throw_letter_repository.append(throw_letter)
        count = await self._category_repository.increment(letter_status.category_name)

        self._probe.letter_thrown(
            letter_status_id=letter_status.id.value,
            thrown_by=letter_status.mentor_id.value,
            category=letter_status.category_name,
            category_count=count,
        )
        return throw_letter

    async def _reassign(self, letter_status: LetterStatus, new_mentor_id: UserId) -> None:
        new_mentor = await self._user_repository.get_by_id(new_mentor_id)
        if new_mentor is None:
            raise UserNotFoundError(f"User {new_mentor_id.value} does not exist")
        if not new_mentor.is_mentor:
            raise InvalidMentorError(f"User {new_mentor_id.value} is not a mentor")
        if new_mentor_id == letter_status.mentor_id:
            raise InvalidMentorError(
                f"User {new_mentor_id.value} already mentors letter status "
                f"{letter_status.id.value}"
            )

        previous_mentor_id = letter_status.mentor_id
        await self._letter_status_repository.set_mentor(letter_status.id, new_mentor_id)
        letter_status.reassign_mentor(new_mentor_id)

        self._probe.mentor_reassigned(
            letter_status_id=letter_status.id.value,
            previous_mentor_id=previous_mentor_id.value,
            new_mentor_id=new_mentor_id.value,
        )
