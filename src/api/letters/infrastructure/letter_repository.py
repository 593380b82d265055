"""PostgreSQL implementation of ILetterRepository."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from letters.domain.aggregates import Letter
from letters.infrastructure.models import LetterModel
from letters.ports.repositories import ILetterRepository


class LetterRepository(ILetterRepository):
    """Insert-only repository for letters."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def save(self, letter: Letter) -> None:
        self._session.add(
            LetterModel(
                id=letter.id.value,
                category_name=letter.category_name,
                title=letter.title,
                body=letter.body,
                written_at=letter.created_at,
            )
        )
        await self._session.flush()
