"""Repository protocols (ports) for the letters bounded context.

Implementations never open transactions; the application service that
calls them owns the transaction boundary. Mutations of an existing thread
are targeted single-column updates rather than whole-aggregate saves.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from iam.domain.value_objects import UserId, UserRole
from letters.domain.aggregates import (
    Letter,
    LetterStatus,
    ThrowLetter,
    ThrowLetterCategory,
)
from letters.domain.value_objects import (
    LetterId,
    LetterListType,
    LetterStatusFlag,
    LetterStatusId,
)
from letters.ports.read_models import LetterSummary
from shared_kernel.pagination import Page


@runtime_checkable
class ILetterRepository(Protocol):
    """Repository for immutable Letter records."""

    async def save(self, letter: Letter) -> None:
        """Insert a letter."""
        ...


@runtime_checkable
class ILetterStatusRepository(Protocol):
    """Repository for LetterStatus threads."""

    async def save(self, letter_status: LetterStatus) -> None:
        """Insert a new thread (its mentee letter must already be saved)."""
        ...

    async def get_by_id(self, letter_status_id: LetterStatusId) -> LetterStatus | None:
        """Retrieve a thread with both letters loaded.

        Returns:
            The LetterStatus aggregate, or None if not found
        """
        ...

    async def get_by_mentor_letter_id(self, letter_id: LetterId) -> LetterStatus | None:
        """Retrieve the thread whose reply is the given letter.

        Returns:
            The LetterStatus aggregate, or None if no thread references it
        """
        ...

    async def set_mentor_letter(
        self, letter_status_id: LetterStatusId, letter_id: LetterId
    ) -> None:
        """Attach a reply, only if the thread has none yet.

        Raises:
            LetterAlreadyRepliedError: If a reply was attached concurrently
        """
        ...

    async def set_mentor(
        self, letter_status_id: LetterStatusId, mentor_id: UserId
    ) -> None:
        """Point the thread at another mentor without touching anything else."""
        ...

    async def set_flag(
        self, letter_status_id: LetterStatusId, flag: LetterStatusFlag
    ) -> bool:
        """Set a monotonic flag to true.

        Returns:
            True if the flag changed, False if it was already set
        """
        ...

    async def list_for_user(
        self,
        user_id: UserId,
        role: UserRole,
        list_type: LetterListType,
        page_number: int,
        page_size: int,
    ) -> Page[LetterSummary]:
        """List a user's threads, most recent mentee letter first.

        Args:
            user_id: The viewing user
            role: Which side of the threads the viewer is on
            list_type: ALL, PENDING (no reply yet) or SAVED (saved by viewer)
            page_number: 1-based page number
            page_size: Threads per page

        Returns:
            One page of summaries with the total count
        """
        ...


@runtime_checkable
class IThrowLetterRepository(Protocol):
    """Append-only repository for throw audit records."""

    async def append(self, throw_letter: ThrowLetter) -> None:
        """Insert an audit record."""
        ...

    async def list_by_letter_status(
        self, letter_status_id: LetterStatusId
    ) -> list[ThrowLetter]:
        """List the throws of a thread, oldest first."""
        ...


@runtime_checkable
class IThrowLetterCategoryRepository(Protocol):
    """Repository for the singleton tally of thrown letters per category."""

    async def ensure_exists(self) -> None:
        """Create the tally if absent; safe under concurrent first callers."""
        ...

    async def increment(self, category_name: str) -> int:
        """Atomically add one to a category's count.

        Returns:
            The new count for the category
        """
        ...

    async def get(self) -> ThrowLetterCategory:
        """Read the tally (empty counts if nothing was thrown yet)."""
        ...
