"""Application-layer value objects for the letters bounded context."""

from __future__ import annotations

from dataclasses import dataclass

from iam.domain.value_objects import UserRole
from letters.domain.aggregates import Letter, LetterStatus
from letters.domain.value_objects import LetterStatusId


@dataclass(frozen=True)
class LetterDraft:
    """A letter a mentee is about to send."""

    category_name: str
    title: str
    body: str


@dataclass(frozen=True)
class ReplyDraft:
    """A mentor's answer; the category comes from the mentee letter."""

    title: str
    body: str


@dataclass(frozen=True)
class LetterDetails:
    """A thread as seen by one of its two participants.

    ``can_reply`` is only ever true in the mentor's view and ``can_thank``
    only in the mentee's view.
    """

    letter_status_id: LetterStatusId
    viewer_role: UserRole
    mentee_letter: Letter
    mentor_letter: Letter | None
    counterpart_nickname: str | None
    is_saved: bool
    is_thanked: bool
    can_reply: bool
    can_thank: bool

    @classmethod
    def for_viewer(
        cls,
        letter_status: LetterStatus,
        viewer_role: UserRole,
        counterpart_nickname: str | None,
    ) -> LetterDetails:
        """Project a thread onto the side of the viewing participant."""
        is_mentor = viewer_role == UserRole.MENTOR
        return cls(
            letter_status_id=letter_status.id,
            viewer_role=viewer_role,
            mentee_letter=letter_status.mentee_letter,
            mentor_letter=letter_status.mentor_letter,
            counterpart_nickname=counterpart_nickname,
            is_saved=letter_status.is_saved_by(viewer_role),
            is_thanked=letter_status.thanked,
            can_reply=is_mentor and not letter_status.is_replied,
            can_thank=(
                not is_mentor and letter_status.is_replied and not letter_status.thanked
            ),
        )
