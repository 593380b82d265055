"""Letter application service for the letters bounded context.

Orchestrates the life of a letter thread: a mentee submits a letter to a
mentor, the mentor replies, and both sides read, save and (for the mentee)
thank. Every write runs in one transaction owned by this service.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import User
from iam.domain.value_objects import UserId, UserRole
from iam.ports.exceptions import (
    InvalidMenteeError,
    InvalidMentorError,
    UserNotFoundError,
)
from iam.ports.repositories import IUserRepository
from letters.application.observability import (
    DefaultLetterServiceProbe,
    LetterServiceProbe,
)
from letters.application.value_objects import LetterDetails, LetterDraft, ReplyDraft
from letters.domain.aggregates import Letter, LetterStatus
from letters.domain.value_objects import (
    LetterId,
    LetterListType,
    LetterStatusFlag,
    LetterStatusId,
)
from letters.ports.exceptions import (
    LetterAlreadyRepliedError,
    LetterStatusNotFoundError,
)
from letters.ports.read_models import LetterSummary
from letters.ports.repositories import ILetterRepository, ILetterStatusRepository
from shared_kernel.pagination import Page


class LetterService:
    """Application service for writing, answering and reading letters."""

    def __init__(
        self,
        session: AsyncSession,
        letter_repository: ILetterRepository,
        letter_status_repository: ILetterStatusRepository,
        user_repository: IUserRepository,
        page_size: int,
        probe: LetterServiceProbe | None = None,
    ):
        """Initialize LetterService with dependencies.

        Args:
            session: Database session for transaction management
            letter_repository: Repository for letter contents
            letter_status_repository: Repository for letter threads
            user_repository: Repository for quota and nicknames
            page_size: Number of threads per listing page
            probe: Optional domain probe for observability
        """
        self._session = session
        self._letter_repository = letter_repository
        self._letter_status_repository = letter_status_repository
        self._user_repository = user_repository
        self._page_size = page_size
        self._probe = probe or DefaultLetterServiceProbe()

    async def submit_letter(
        self, draft: LetterDraft, mentee_id: UserId, mentor_id: UserId
    ) -> LetterStatus:
        """Send a mentee letter to a mentor.

        Consumes one unit of the mentee's quota, stores the letter and opens
        a thread with every flag false and no reply.

        Args:
            draft: Category, title and body of the letter
            mentee_id: The writing mentee
            mentor_id: The receiving mentor

        Returns:
            The new LetterStatus

        Raises:
            ValueError: If category, title or body is blank
            QuotaExceededError: If the mentee has no quota left
            UserNotFoundError: If the mentee or the mentor does not exist
            InvalidMenteeError: If the sender is not a mentee
            InvalidMentorError: If the recipient is not a mentor
        """
        try:
            letter = Letter.write(
                category_name=draft.category_name,
                title=draft.title,
                body=draft.body,
                now=datetime.now(UTC),
            )

            async with self._session.begin():
                await self._check_participants(mentee_id, mentor_id)
                remaining = await self._user_repository.decrement_quota(mentee_id)
                await self._letter_repository.save(letter)

                letter_status = LetterStatus.open(
                    mentee_letter=letter, mentee_id=mentee_id, mentor_id=mentor_id
                )
                await self._letter_status_repository.save(letter_status)

        except Exception as e:
            self._probe.operation_failed("submit_letter", str(e))
            raise

        self._probe.letter_submitted(
            letter_status_id=letter_status.id.value,
            mentee_id=mentee_id.value,
            mentor_id=mentor_id.value,
            category=letter.category_name,
            remaining_quota=remaining,
        )
        return letter_status

    async def reply_to_letter(
        self, letter_status_id: LetterStatusId, reply: ReplyDraft
    ) -> LetterStatus:
        """Store the mentor's reply to a thread.

        The reply inherits the category of the mentee letter and consumes
        one unit of the mentor's quota. A thread is answered at most once,
        even when two replies race.

        Raises:
            LetterStatusNotFoundError: If the thread does not exist
            LetterAlreadyRepliedError: If the thread already has a reply
            QuotaExceededError: If the mentor has no quota left
        """
        try:
            async with self._session.begin():
                letter_status = await self._load(letter_status_id)
                if letter_status.is_replied:
                    raise LetterAlreadyRepliedError(
                        f"Letter status {letter_status_id.value} already has a reply"
                    )

                remaining = await self._user_repository.decrement_quota(
                    letter_status.mentor_id
                )

                reply_letter = letter_status.mentee_letter.reply(
                    title=reply.title, body=reply.body, now=datetime.now(UTC)
                )
                await self._letter_repository.save(reply_letter)
                await self._letter_status_repository.set_mentor_letter(
                    letter_status_id, reply_letter.id
                )
                letter_status.attach_reply(reply_letter)

        except Exception as e:
            self._probe.operation_failed("reply_to_letter", str(e))
            raise

        self._probe.letter_replied(
            letter_status_id=letter_status_id.value,
            mentor_id=letter_status.mentor_id.value,
            remaining_quota=remaining,
        )
        return letter_status

    async def list_letters(
        self,
        user: User,
        page_number: int = 1,
        list_type: LetterListType = LetterListType.ALL,
    ) -> Page[LetterSummary]:
        """List the threads of a user from their own side.

        Raises:
            ValueError: If the user has no role yet or page_number < 1
        """
        if user.role is None:
            raise ValueError(f"User {user.id.value} has not completed registration")

        return await self._letter_status_repository.list_for_user(
            user_id=user.id,
            role=user.role,
            list_type=list_type,
            page_number=page_number,
            page_size=self._page_size,
        )

    async def get_letter_status(self, letter_status_id: LetterStatusId) -> LetterStatus:
        """Get a thread by ID.

        Raises:
            LetterStatusNotFoundError: If the thread does not exist
        """
        return await self._load(letter_status_id)

    async def view_details(
        self, user: User, letter_status_id: LetterStatusId
    ) -> LetterDetails:
        """Open a thread, marking it read by the viewer on the first view.

        Raises:
            LetterStatusNotFoundError: If the thread does not exist or the
                user takes no part in it
        """
        async with self._session.begin():
            letter_status, side = await self._load_for_participant(
                user.id, letter_status_id
            )

            first_view = False
            flag = LetterStatusFlag.read_by(side)
            if not letter_status.is_flag_set(flag):
                first_view = await self._letter_status_repository.set_flag(
                    letter_status_id, flag
                )
                letter_status.mark_read(side)

            counterpart_id = (
                letter_status.mentor_id
                if side == UserRole.MENTEE
                else letter_status.mentee_id
            )
            counterpart = await self._user_repository.get_by_id(counterpart_id)

        self._probe.letter_viewed(letter_status_id.value, user.id.value, first_view)
        return LetterDetails.for_viewer(
            letter_status,
            viewer_role=side,
            counterpart_nickname=counterpart.nickname if counterpart else None,
        )

    async def save_letter(
        self, user: User, letter_status_id: LetterStatusId
    ) -> LetterStatus:
        """Keep a thread in the viewer's saved list. Saving twice is a no-op.

        Raises:
            LetterStatusNotFoundError: If the thread does not exist or the
                user takes no part in it
        """
        async with self._session.begin():
            letter_status, side = await self._load_for_participant(
                user.id, letter_status_id
            )
            await self._letter_status_repository.set_flag(
                letter_status_id, LetterStatusFlag.saved_by(side)
            )
            letter_status.mark_saved(side)

        self._probe.letter_saved(letter_status_id.value, user.id.value)
        return letter_status

    async def thanks_to_mentor(self, mentor_letter_id: LetterId) -> LetterStatus:
        """Thank the mentor for a reply. Thanking twice is a no-op.

        Args:
            mentor_letter_id: ID of the mentor's reply letter

        Raises:
            LetterStatusNotFoundError: If no thread has that reply
        """
        async with self._session.begin():
            letter_status = (
                await self._letter_status_repository.get_by_mentor_letter_id(
                    mentor_letter_id
                )
            )
            if letter_status is None:
                raise LetterStatusNotFoundError(
                    f"No letter status for mentor letter {mentor_letter_id.value}"
                )

            changed = await self._letter_status_repository.set_flag(
                letter_status.id, LetterStatusFlag.THANKED
            )
            letter_status.thank()

        self._probe.mentor_thanked(letter_status.id.value, changed)
        return letter_status

    async def _check_participants(self, mentee_id: UserId, mentor_id: UserId) -> None:
        mentee = await self._user_repository.get_by_id(mentee_id)
        if mentee is None:
            raise UserNotFoundError(f"User {mentee_id.value} does not exist")
        if not mentee.is_mentee:
            raise InvalidMenteeError(f"User {mentee_id.value} is not a mentee")

        mentor = await self._user_repository.get_by_id(mentor_id)
        if mentor is None:
            raise UserNotFoundError(f"User {mentor_id.value} does not exist")
        if not mentor.is_mentor:
            raise InvalidMentorError(f"User {mentor_id.value} is not a mentor")

    async def _load(self, letter_status_id: LetterStatusId) -> LetterStatus:
        letter_status = await self._letter_status_repository.get_by_id(
            letter_status_id
        )
        if letter_status is None:
            raise LetterStatusNotFoundError(
                f"Letter status {letter_status_id.value} does not exist"
            )
        return letter_status

    async def _load_for_participant(
        self, user_id: UserId, letter_status_id: LetterStatusId
    ) -> tuple[LetterStatus, UserRole]:
        letter_status = await self._load(letter_status_id)
        side = letter_status.side_of(user_id)
        if side is None:
            raise LetterStatusNotFoundError(
                f"Letter status {letter_status_id.value} does not exist"
            )
        return letter_status, side
