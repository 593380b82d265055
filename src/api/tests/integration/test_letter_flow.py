"""Integration tests for the letter lifecycle against PostgreSQL."""

from __future__ import annotations

import asyncio

import pytest

from iam.domain.value_objects import UserRole
from iam.infrastructure.user_repository import UserRepository
from iam.ports.exceptions import QuotaExceededError
from letters.application.services import LetterService, ThrowService
from letters.application.value_objects import LetterDraft, ReplyDraft
from letters.domain.value_objects import LetterListType
from letters.infrastructure.letter_repository import LetterRepository
from letters.infrastructure.letter_status_repository import LetterStatusRepository
from letters.infrastructure.throw_letter_repository import (
    ThrowLetterCategoryRepository,
    ThrowLetterRepository,
)
from letters.ports.exceptions import LetterAlreadyRepliedError
from notifications.application.services import NotificationService
from notifications.infrastructure.notification_repository import (
    NotificationRepository,
)

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]

DRAFT = LetterDraft(category_name="career", title="Which path?", body="Help")


def letter_service(session) -> LetterService:
    return LetterService(
        session=session,
        letter_repository=LetterRepository(session),
        letter_status_repository=LetterStatusRepository(session),
        user_repository=UserRepository(session),
        page_size=10,
    )


def throw_service(session) -> ThrowService:
    return ThrowService(
        session=session,
        letter_status_repository=LetterStatusRepository(session),
        throw_letter_repository=ThrowLetterRepository(session),
        category_repository=ThrowLetterCategoryRepository(session),
        user_repository=UserRepository(session),
    )


async def test_submit_reply_and_thank(sessionmaker, create_user):
    mentee = await create_user(UserRole.MENTEE, "sparrow", quota=1)
    mentor = await create_user(UserRole.MENTOR, "owl", quota=1)

    async with sessionmaker() as session:
        status = await letter_service(session).submit_letter(
            DRAFT, mentee.id, mentor.id
        )

    async with sessionmaker() as session:
        with pytest.raises(QuotaExceededError):
            await letter_service(session).submit_letter(DRAFT, mentee.id, mentor.id)

    async with sessionmaker() as session:
        replied = await letter_service(session).reply_to_letter(
            status.id, ReplyDraft(title="Re: Which path?", body="Try both")
        )
    assert replied.mentor_letter.category_name == "career"

    async with sessionmaker() as session:
        page = await letter_service(session).list_letters(
            mentee, list_type=LetterListType.ALL
        )
    assert page.total_elements == 1
    summary = page.items[0]
    assert summary.counterpart_nickname == "owl"
    assert summary.is_replied is True
    assert summary.is_read is False

    async with sessionmaker() as session:
        details = await letter_service(session).view_details(mentee, status.id)
    assert details.can_thank is True

    async with sessionmaker() as session:
        thanked = await letter_service(session).thanks_to_mentor(
            replied.mentor_letter.id
        )
    assert thanked.thanked is True

    async with sessionmaker() as session:
        page = await letter_service(session).list_letters(mentee)
    assert page.items[0].is_read is True
    assert page.items[0].is_thanked is True


async def test_pending_list_for_mentor(sessionmaker, create_user):
    mentee = await create_user(UserRole.MENTEE, "wren", quota=3)
    mentor = await create_user(UserRole.MENTOR, "hawk", quota=3)

    for _ in range(2):
        async with sessionmaker() as session:
            await letter_service(session).submit_letter(DRAFT, mentee.id, mentor.id)

    async with sessionmaker() as session:
        page = await letter_service(session).list_letters(
            mentor, list_type=LetterListType.PENDING
        )

    assert page.total_elements == 2
    assert all(item.counterpart_nickname == "wren" for item in page.items)


async def test_concurrent_replies_store_one(sessionmaker, create_user):
    mentee = await create_user(UserRole.MENTEE, "robin")
    mentor = await create_user(UserRole.MENTOR, "eagle", quota=5)

    async with sessionmaker() as session:
        status = await letter_service(session).submit_letter(
            DRAFT, mentee.id, mentor.id
        )

    async def reply(body: str):
        async with sessionmaker() as session:
            return await letter_service(session).reply_to_letter(
                status.id, ReplyDraft(title="Re", body=body)
            )

    results = await asyncio.gather(
        reply("first"), reply("second"), return_exceptions=True
    )

    errors = [r for r in results if isinstance(r, Exception)]
    assert len(errors) == 1
    assert isinstance(errors[0], LetterAlreadyRepliedError)

    async with sessionmaker() as session:
        mentor_after = await UserRepository(session).get_by_id(mentor.id)
    assert mentor_after.quota == 4


async def test_throw_to_another_mentor(sessionmaker, create_user):
    mentee = await create_user(UserRole.MENTEE, "finch")
    first_mentor = await create_user(UserRole.MENTOR, "heron")
    second_mentor = await create_user(UserRole.MENTOR, "crane")

    async with sessionmaker() as session:
        await throw_service(session).ensure_category_tally()

    async with sessionmaker() as session:
        status = await letter_service(session).submit_letter(
            DRAFT, mentee.id, first_mentor.id
        )

    async with sessionmaker() as session:
        moved = await throw_service(session).throw_to_mentor(
            status.id, second_mentor.id
        )
    assert moved.mentor_id == second_mentor.id

    async with sessionmaker() as session:
        statistics = await throw_service(session).get_category_statistics()
        throws = await ThrowLetterRepository(session).list_by_letter_status(status.id)

    assert statistics.count_for("career") == 1
    assert [t.thrown_by for t in throws] == [first_mentor.id]


async def test_notifications_append_and_delete(sessionmaker, create_user):
    user = await create_user(UserRole.MENTEE, "lark")

    for message in ("one", "two"):
        async with sessionmaker() as session:
            await NotificationService(
                session, NotificationRepository(session)
            ).append(user.id, message)

    async with sessionmaker() as session:
        service = NotificationService(session, NotificationRepository(session))
        listed = await service.list_notifications(user.id)
    assert [n.message for n in listed] == ["one", "two"]

    async with sessionmaker() as session:
        service = NotificationService(session, NotificationRepository(session))
        assert await service.delete_all(user.id) == 2
