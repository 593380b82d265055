"""PostgreSQL implementations of the reference-data repositories."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import Bird, Category
from iam.domain.value_objects import BirdId, CategoryId
from iam.infrastructure.models import BirdModel, CategoryModel
from iam.ports.repositories import IBirdRepository, ICategoryRepository


class BirdRepository(IBirdRepository):
    """Read-only repository for bird avatars."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_name(self, name: str) -> Bird | None:
        result = await self._session.execute(
            select(BirdModel).where(BirdModel.name == name)
        )
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return Bird(id=BirdId(value=model.id), name=model.name)

    async def list_all(self) -> list[Bird]:
        result = await self._session.execute(select(BirdModel).order_by(BirdModel.name))
        return [
            Bird(id=BirdId(value=model.id), name=model.name)
            for model in result.scalars().all()
        ]


class CategoryRepository(ICategoryRepository):
    """Read-only repository for mentoring categories."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_name(self, name: str) -> Category | None:
        result = await self._session.execute(
            select(CategoryModel).where(CategoryModel.name == name)
        )
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return Category(id=CategoryId(value=model.id), name=model.name)

    async def list_all(self) -> list[Category]:
        result = await self._session.execute(
            select(CategoryModel).order_by(CategoryModel.name)
        )
        return [
            Category(id=CategoryId(value=model.id), name=model.name)
            for model in result.scalars().all()
        ]
