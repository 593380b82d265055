"""Value objects for the letters domain."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from iam.domain.value_objects import UserRole
from shared_kernel.identifiers import UlidIdentifier


@dataclass(frozen=True)
class LetterId(UlidIdentifier):
    """Identifier for a Letter."""


@dataclass(frozen=True)
class LetterStatusId(UlidIdentifier):
    """Identifier for a LetterStatus thread."""


@dataclass(frozen=True)
class ThrowLetterId(UlidIdentifier):
    """Identifier for a ThrowLetter audit record."""


class LetterListType(StrEnum):
    """Filters for a user's letter list.

    PENDING lists threads without a reply yet; SAVED lists threads the
    viewing user saved.
    """

    ALL = "ALL"
    PENDING = "PENDING"
    SAVED = "SAVED"


class LetterStatusFlag(StrEnum):
    """Boolean columns of a LetterStatus that only ever go from false to true."""

    MENTEE_READ = "mentee_read"
    MENTOR_READ = "mentor_read"
    MENTEE_SAVED = "mentee_saved"
    MENTOR_SAVED = "mentor_saved"
    THANKED = "thanked"

    @classmethod
    def read_by(cls, role: UserRole) -> LetterStatusFlag:
        """The read flag belonging to one side of a thread."""
        if role == UserRole.MENTEE:
            return cls.MENTEE_READ
        return cls.MENTOR_READ

    @classmethod
    def saved_by(cls, role: UserRole) -> LetterStatusFlag:
        """The saved flag belonging to one side of a thread."""
        if role == UserRole.MENTEE:
            return cls.MENTEE_SAVED
        return cls.MENTOR_SAVED
