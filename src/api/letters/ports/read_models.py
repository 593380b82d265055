"""Read models returned by letter queries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from letters.domain.value_objects import LetterId, LetterStatusId


@dataclass(frozen=True)
class LetterSummary:
    """One row of a user's letter list, seen from the viewer's side."""

    letter_status_id: LetterStatusId
    mentee_letter_id: LetterId
    mentor_letter_id: LetterId | None
    category_name: str
    title: str
    counterpart_nickname: str | None
    is_read: bool
    is_saved: bool
    is_thanked: bool
    created_at: datetime

    @property
    def is_replied(self) -> bool:
        """Check if the mentor has answered."""
        return self.mentor_letter_id is not None
