"""LetterStatus aggregate: the mutable state of one letter thread."""

from __future__ import annotations

from dataclasses import dataclass

from iam.domain.value_objects import UserId, UserRole
from letters.domain.aggregates.letter import Letter
from letters.domain.value_objects import LetterStatusFlag, LetterStatusId


@dataclass
class LetterStatus:
    """Binds a mentee letter to its mentor, the optional reply and flags.

    Business rules:
    - mentor_letter is None until the mentor replies, and a reply is never
      replaced
    - Throwing a letter changes the mentor, never the letters
    - Read, saved and thanked flags only go from False to True
    """

    id: LetterStatusId
    mentee_letter: Letter
    mentee_id: UserId
    mentor_id: UserId
    mentor_letter: Letter | None = None
    mentee_read: bool = False
    mentor_read: bool = False
    mentee_saved: bool = False
    mentor_saved: bool = False
    thanked: bool = False

    @classmethod
    def open(
        cls, mentee_letter: Letter, mentee_id: UserId, mentor_id: UserId
    ) -> LetterStatus:
        """Factory method for the thread of a freshly submitted letter."""
        return cls(
            id=LetterStatusId.generate(),
            mentee_letter=mentee_letter,
            mentee_id=mentee_id,
            mentor_id=mentor_id,
        )

    @property
    def is_replied(self) -> bool:
        """Check if the mentor has answered."""
        return self.mentor_letter is not None

    @property
    def category_name(self) -> str:
        """Category of the thread, taken from the mentee letter."""
        return self.mentee_letter.category_name

    def attach_reply(self, reply: Letter) -> None:
        """Record the mentor's reply.

        Raises:
            LetterAlreadyRepliedError: If a reply is already attached
        """
        from letters.ports.exceptions import LetterAlreadyRepliedError

        if self.mentor_letter is not None:
            raise LetterAlreadyRepliedError(
                f"Letter status {self.id.value} already has a reply"
            )
        self.mentor_letter = reply

    def reassign_mentor(self, new_mentor_id: UserId) -> None:
        """Route the thread to another mentor."""
        self.mentor_id = new_mentor_id

    def side_of(self, user_id: UserId) -> UserRole | None:
        """Return which side of the thread a user is on, if any."""
        if user_id == self.mentee_id:
            return UserRole.MENTEE
        if user_id == self.mentor_id:
            return UserRole.MENTOR
        return None

    def is_flag_set(self, flag: LetterStatusFlag) -> bool:
        """Read one of the monotonic flags."""
        return getattr(self, flag.value)

    def mark_read(self, role: UserRole) -> LetterStatusFlag | None:
        """Mark the thread read by one side.

        Returns:
            The flag that changed, or None if it was already set
        """
        return self._set_flag(LetterStatusFlag.read_by(role))

    def mark_saved(self, role: UserRole) -> LetterStatusFlag | None:
        """Mark the thread saved by one side.

        Returns:
            The flag that changed, or None if it was already set
        """
        return self._set_flag(LetterStatusFlag.saved_by(role))

    def thank(self) -> LetterStatusFlag | None:
        """Record the mentee's thanks.

        Returns:
            The flag that changed, or None if already thanked
        """
        return self._set_flag(LetterStatusFlag.THANKED)

    def is_read_by(self, role: UserRole) -> bool:
        return self.is_flag_set(LetterStatusFlag.read_by(role))

    def is_saved_by(self, role: UserRole) -> bool:
        return self.is_flag_set(LetterStatusFlag.saved_by(role))

    def _set_flag(self, flag: LetterStatusFlag) -> LetterStatusFlag | None:
        if self.is_flag_set(flag):
            return None
        setattr(self, flag.value, True)
        return flag
