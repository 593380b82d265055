"""Letter entity: the immutable content of one letter."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from letters.domain.value_objects import LetterId


@dataclass(frozen=True)
class Letter:
    """A letter written by a mentee or a mentor.

    Letters never change after creation. A reply inherits the category of
    the letter it answers.
    """

    id: LetterId
    category_name: str
    title: str
    body: str
    created_at: datetime

    @classmethod
    def write(
        cls,
        category_name: str,
        title: str,
        body: str,
        now: datetime | None = None,
    ) -> Letter:
        """Factory method for a new letter.

        Raises:
            ValueError: If category, title or body is blank
        """
        if not category_name.strip():
            raise ValueError("A letter needs a category")
        if not title.strip():
            raise ValueError("A letter needs a title")
        if not body.strip():
            raise ValueError("A letter needs a body")

        return cls(
            id=LetterId.generate(),
            category_name=category_name,
            title=title,
            body=body,
            created_at=now or datetime.now(UTC),
        )

    def reply(self, title: str, body: str, now: datetime | None = None) -> Letter:
        """Write a reply to this letter, in the same category."""
        return Letter.write(
            category_name=self.category_name,
            title=title,
            body=body,
            now=now,
        )
