"""Throw audit record and the category tally of thrown letters."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from iam.domain.value_objects import UserId
from letters.domain.value_objects import LetterStatusId, ThrowLetterId

CATEGORY_TALLY_ID = 1


@dataclass(frozen=True)
class ThrowLetter:
    """Append-only record of a mentor throwing a letter.

    Never updated or deleted once written.
    """

    id: ThrowLetterId
    letter_status_id: LetterStatusId
    thrown_by: UserId
    thrown_at: datetime

    @classmethod
    def record(
        cls,
        letter_status_id: LetterStatusId,
        thrown_by: UserId,
        now: datetime | None = None,
    ) -> ThrowLetter:
        """Factory method for a new audit record."""
        return cls(
            id=ThrowLetterId.generate(),
            letter_status_id=letter_status_id,
            thrown_by=thrown_by,
            thrown_at=now or datetime.now(UTC),
        )


@dataclass(frozen=True)
class ThrowLetterCategory:
    """Singleton tally of thrown letters per category name."""

    id: int = CATEGORY_TALLY_ID
    counts: dict[str, int] = field(default_factory=dict)

    def count_for(self, category_name: str) -> int:
        """Number of thrown letters in a category (0 if never thrown)."""
        return self.counts.get(category_name, 0)

    @property
    def total(self) -> int:
        """Number of thrown letters across all categories."""
        return sum(self.counts.values())
