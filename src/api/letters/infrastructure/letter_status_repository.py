"""PostgreSQL implementation of ILetterStatusRepository.

Threads are loaded together with both letters through two aliased joins on
the letters table. Replies and flags are written with conditional UPDATE
statements, so a transition happens at most once even when two requests
race on the same thread.
"""

from __future__ import annotations

from sqlalchemy import Select, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from iam.domain.value_objects import UserId, UserRole
from iam.infrastructure.models import UserModel
from letters.domain.aggregates import Letter, LetterStatus
from letters.domain.value_objects import (
    LetterId,
    LetterListType,
    LetterStatusFlag,
    LetterStatusId,
)
from letters.infrastructure.models import LetterModel, LetterStatusModel
from letters.infrastructure.observability import (
    DefaultLetterStatusRepositoryProbe,
    LetterStatusRepositoryProbe,
)
from letters.ports.exceptions import LetterAlreadyRepliedError
from letters.ports.read_models import LetterSummary
from letters.ports.repositories import ILetterStatusRepository
from shared_kernel.pagination import Page

MenteeLetter = aliased(LetterModel, name="mentee_letter")
MentorLetter = aliased(LetterModel, name="mentor_letter")
Counterpart = aliased(UserModel, name="counterpart")


class LetterStatusRepository(ILetterStatusRepository):
    """PostgreSQL-backed repository for LetterStatus threads."""

    def __init__(
        self,
        session: AsyncSession,
        probe: LetterStatusRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession whose transaction is owned by the caller
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultLetterStatusRepositoryProbe()

    async def save(self, letter_status: LetterStatus) -> None:
        """Insert a new thread.

        The mentee letter (and the reply, if any) must already be saved.
        """
        self._session.add(
            LetterStatusModel(
                id=letter_status.id.value,
                mentee_letter_id=letter_status.mentee_letter.id.value,
                mentor_letter_id=(
                    letter_status.mentor_letter.id.value
                    if letter_status.mentor_letter
                    else None
                ),
                mentee_id=letter_status.mentee_id.value,
                mentor_id=letter_status.mentor_id.value,
                mentee_read=letter_status.mentee_read,
                mentor_read=letter_status.mentor_read,
                mentee_saved=letter_status.mentee_saved,
                mentor_saved=letter_status.mentor_saved,
                thanked=letter_status.thanked,
            )
        )
        await self._session.flush()
        self._probe.letter_status_saved(letter_status.id.value)

    async def get_by_id(self, letter_status_id: LetterStatusId) -> LetterStatus | None:
        stmt = self._thread_query().where(LetterStatusModel.id == letter_status_id.value)
        return await self._fetch_one(stmt, letter_status_id.value)

    async def get_by_mentor_letter_id(self, letter_id: LetterId) -> LetterStatus | None:
        stmt = self._thread_query().where(
            LetterStatusModel.mentor_letter_id == letter_id.value
        )
        return await self._fetch_one(stmt, f"mentor_letter:{letter_id.value}")

    async def set_mentor_letter(
        self, letter_status_id: LetterStatusId, letter_id: LetterId
    ) -> None:
        """Attach a reply with ``WHERE mentor_letter_id IS NULL``.

        Raises:
            LetterAlreadyRepliedError: If the thread already has a reply
        """
        stmt = (
            update(LetterStatusModel)
            .where(
                LetterStatusModel.id == letter_status_id.value,
                LetterStatusModel.mentor_letter_id.is_(None),
            )
            .values(mentor_letter_id=letter_id.value)
            .returning(LetterStatusModel.id)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        if result.scalar_one_or_none() is None:
            self._probe.reply_conflict(letter_status_id.value)
            raise LetterAlreadyRepliedError(
                f"Letter status {letter_status_id.value} already has a reply"
            )

    async def set_mentor(
        self, letter_status_id: LetterStatusId, mentor_id: UserId
    ) -> None:
        stmt = (
            update(LetterStatusModel)
            .where(LetterStatusModel.id == letter_status_id.value)
            .values(mentor_id=mentor_id.value)
            .execution_options(synchronize_session=False)
        )
        await self._session.execute(stmt)

    async def set_flag(
        self, letter_status_id: LetterStatusId, flag: LetterStatusFlag
    ) -> bool:
        """Set a flag with ``WHERE <flag> IS false``.

        Returns:
            True if this call changed the flag
        """
        column = getattr(LetterStatusModel, flag.value)
        stmt = (
            update(LetterStatusModel)
            .where(LetterStatusModel.id == letter_status_id.value, column.is_(False))
            .values({flag.value: True})
            .returning(LetterStatusModel.id)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        changed = result.scalar_one_or_none() is not None
        self._probe.flag_set(letter_status_id.value, flag.value, changed)
        return changed

    async def list_for_user(
        self,
        user_id: UserId,
        role: UserRole,
        list_type: LetterListType,
        page_number: int,
        page_size: int,
    ) -> Page[LetterSummary]:
        offset = Page.offset_for(page_number, page_size)

        if role == UserRole.MENTEE:
            own_column = LetterStatusModel.mentee_id
            counterpart_column = LetterStatusModel.mentor_id
        else:
            own_column = LetterStatusModel.mentor_id
            counterpart_column = LetterStatusModel.mentee_id

        read_column = getattr(LetterStatusModel, LetterStatusFlag.read_by(role).value)
        saved_column = getattr(
            LetterStatusModel, LetterStatusFlag.saved_by(role).value
        )

        conditions = [own_column == user_id.value]
        if list_type == LetterListType.PENDING:
            conditions.append(LetterStatusModel.mentor_letter_id.is_(None))
        elif list_type == LetterListType.SAVED:
            conditions.append(saved_column.is_(True))

        count_stmt = (
            select(func.count()).select_from(LetterStatusModel).where(*conditions)
        )
        total = (await self._session.execute(count_stmt)).scalar_one()

        stmt = (
            select(
                LetterStatusModel.id,
                LetterStatusModel.mentee_letter_id,
                LetterStatusModel.mentor_letter_id,
                MenteeLetter.category_name,
                MenteeLetter.title,
                MenteeLetter.written_at,
                Counterpart.nickname,
                read_column.label("is_read"),
                saved_column.label("is_saved"),
                LetterStatusModel.thanked,
            )
            .join(MenteeLetter, MenteeLetter.id == LetterStatusModel.mentee_letter_id)
            .outerjoin(Counterpart, Counterpart.id == counterpart_column)
            .where(*conditions)
            .order_by(MenteeLetter.written_at.desc(), LetterStatusModel.id.desc())
            .offset(offset)
            .limit(page_size)
        )
        rows = (await self._session.execute(stmt)).all()

        items = [
            LetterSummary(
                letter_status_id=LetterStatusId(value=row.id),
                mentee_letter_id=LetterId(value=row.mentee_letter_id),
                mentor_letter_id=(
                    LetterId(value=row.mentor_letter_id)
                    if row.mentor_letter_id
                    else None
                ),
                category_name=row.category_name,
                title=row.title,
                counterpart_nickname=row.nickname,
                is_read=row.is_read,
                is_saved=row.is_saved,
                is_thanked=row.thanked,
                created_at=row.written_at,
            )
            for row in rows
        ]
        self._probe.letters_listed(user_id.value, list_type.value, len(items))

        return Page(
            items=items,
            page_number=page_number,
            page_size=page_size,
            total_elements=total,
        )

    @staticmethod
    def _thread_query() -> Select:
        return (
            select(LetterStatusModel, MenteeLetter, MentorLetter)
            .join(MenteeLetter, MenteeLetter.id == LetterStatusModel.mentee_letter_id)
            .outerjoin(
                MentorLetter, MentorLetter.id == LetterStatusModel.mentor_letter_id
            )
        )

    async def _fetch_one(self, stmt: Select, lookup: str) -> LetterStatus | None:
        result = await self._session.execute(stmt)
        row = result.one_or_none()
        if row is None:
            self._probe.letter_status_not_found(lookup)
            return None

        status_model, mentee_letter, mentor_letter = row
        return self._to_domain(status_model, mentee_letter, mentor_letter)

    @staticmethod
    def _letter_to_domain(model: LetterModel) -> Letter:
        return Letter(
            id=LetterId(value=model.id),
            category_name=model.category_name,
            title=model.title,
            body=model.body,
            created_at=model.written_at,
        )

    @classmethod
    def _to_domain(
        cls,
        model: LetterStatusModel,
        mentee_letter: LetterModel,
        mentor_letter: LetterModel | None,
    ) -> LetterStatus:
        return LetterStatus(
            id=LetterStatusId(value=model.id),
            mentee_letter=cls._letter_to_domain(mentee_letter),
            mentee_id=UserId(value=model.mentee_id),
            mentor_id=UserId(value=model.mentor_id),
            mentor_letter=(
                cls._letter_to_domain(mentor_letter) if mentor_letter else None
            ),
            mentee_read=model.mentee_read,
            mentor_read=model.mentor_read,
            mentee_saved=model.mentee_saved,
            mentor_saved=model.mentor_saved,
            thanked=model.thanked,
        )
