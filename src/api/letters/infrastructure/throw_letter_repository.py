"""PostgreSQL implementations of the throw audit and tally repositories.

The tally is a single parent row (id 1) with one child row per category.
Both the parent and the per-category counters are written with
``INSERT ... ON CONFLICT``, so concurrent first throws in a category never
fail and never lose an increment.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.value_objects import UserId
from letters.domain.aggregates import (
    CATEGORY_TALLY_ID,
    ThrowLetter,
    ThrowLetterCategory,
)
from letters.domain.value_objects import LetterStatusId, ThrowLetterId
from letters.infrastructure.models import (
    ThrowLetterCategoryCountModel,
    ThrowLetterCategoryModel,
    ThrowLetterModel,
)
from letters.infrastructure.observability import (
    DefaultThrowLetterRepositoryProbe,
    ThrowLetterRepositoryProbe,
)
from letters.ports.repositories import (
    IThrowLetterCategoryRepository,
    IThrowLetterRepository,
)


class ThrowLetterRepository(IThrowLetterRepository):
    """Append-only repository for throw audit records."""

    def __init__(
        self,
        session: AsyncSession,
        probe: ThrowLetterRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultThrowLetterRepositoryProbe()

    async def append(self, throw_letter: ThrowLetter) -> None:
        self._session.add(
            ThrowLetterModel(
                id=throw_letter.id.value,
                letter_status_id=throw_letter.letter_status_id.value,
                thrown_by=throw_letter.thrown_by.value,
                thrown_at=throw_letter.thrown_at,
            )
        )
        await self._session.flush()
        self._probe.throw_recorded(
            throw_letter.id.value, throw_letter.letter_status_id.value
        )

    async def list_by_letter_status(
        self, letter_status_id: LetterStatusId
    ) -> list[ThrowLetter]:
        stmt = (
            select(ThrowLetterModel)
            .where(ThrowLetterModel.letter_status_id == letter_status_id.value)
            .order_by(ThrowLetterModel.thrown_at, ThrowLetterModel.id)
        )
        result = await self._session.execute(stmt)
        return [
            ThrowLetter(
                id=ThrowLetterId(value=model.id),
                letter_status_id=LetterStatusId(value=model.letter_status_id),
                thrown_by=UserId(value=model.thrown_by),
                thrown_at=model.thrown_at,
            )
            for model in result.scalars().all()
        ]


class ThrowLetterCategoryRepository(IThrowLetterCategoryRepository):
    """Repository for the singleton category tally."""

    def __init__(
        self,
        session: AsyncSession,
        probe: ThrowLetterRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultThrowLetterRepositoryProbe()

    async def ensure_exists(self) -> None:
        stmt = (
            pg_insert(ThrowLetterCategoryModel)
            .values(id=CATEGORY_TALLY_ID)
            .on_conflict_do_nothing(index_elements=[ThrowLetterCategoryModel.id])
        )
        await self._session.execute(stmt)

    async def increment(self, category_name: str) -> int:
        """Add one to a category's counter, creating it at 1 if absent."""
        await self.ensure_exists()

        insert_stmt = pg_insert(ThrowLetterCategoryCountModel).values(
            tally_id=CATEGORY_TALLY_ID,
            category_name=category_name,
            thrown_count=1,
        )
        stmt = insert_stmt.on_conflict_do_update(
            index_elements=[
                ThrowLetterCategoryCountModel.tally_id,
                ThrowLetterCategoryCountModel.category_name,
            ],
            set_={
                "thrown_count": ThrowLetterCategoryCountModel.thrown_count + 1,
            },
        ).returning(ThrowLetterCategoryCountModel.thrown_count)

        result = await self._session.execute(stmt)
        count = result.scalar_one()
        self._probe.category_incremented(category_name, count)
        return count

    async def get(self) -> ThrowLetterCategory:
        stmt = select(
            ThrowLetterCategoryCountModel.category_name,
            ThrowLetterCategoryCountModel.thrown_count,
        ).where(ThrowLetterCategoryCountModel.tally_id == CATEGORY_TALLY_ID)
        result = await self._session.execute(stmt)
        return ThrowLetterCategory(
            id=CATEGORY_TALLY_ID,
            counts={row.category_name: row.thrown_count for row in result.all()},
        )
