"""Unit tests for the throw audit and category tally repositories."""

from datetime import UTC, datetime
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from sqlalchemy.dialects import postgresql

from iam.domain.value_objects import UserId
from letters.domain.aggregates import ThrowLetter
from letters.domain.value_objects import LetterStatusId, ThrowLetterId
from letters.infrastructure.models import ThrowLetterModel
from letters.infrastructure.throw_letter_repository import (
    ThrowLetterCategoryRepository,
    ThrowLetterRepository,
)
from letters.ports.repositories import (
    IThrowLetterCategoryRepository,
    IThrowLetterRepository,
)


def issued_sql(mock_session, call_index: int = 0) -> str:
    statement = mock_session.execute.call_args_list[call_index][0][0]
    return str(statement.compile(dialect=postgresql.dialect()))


class TestThrowLetterRepository:
    def test_implements_protocol(self, mock_session):
        assert isinstance(ThrowLetterRepository(mock_session), IThrowLetterRepository)

    @pytest.mark.asyncio
    async def test_append_inserts_record(self, mock_session):
        record = ThrowLetter.record(LetterStatusId.generate(), UserId.generate())

        await ThrowLetterRepository(mock_session).append(record)

        model = mock_session.add.call_args[0][0]
        assert isinstance(model, ThrowLetterModel)
        assert model.letter_status_id == record.letter_status_id.value
        assert model.thrown_by == record.thrown_by.value
        mock_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_lists_records_oldest_first(self, mock_session):
        status_id = LetterStatusId.generate()
        model = ThrowLetterModel(
            id=ThrowLetterId.generate().value,
            letter_status_id=status_id.value,
            thrown_by=UserId.generate().value,
            thrown_at=datetime(2024, 3, 1, tzinfo=UTC),
        )
        result = MagicMock()
        result.scalars.return_value.all.return_value = [model]
        mock_session.execute.return_value = result

        records = await ThrowLetterRepository(mock_session).list_by_letter_status(
            status_id
        )

        assert [r.id.value for r in records] == [model.id]
        assert "ORDER BY throw_letters.thrown_at, throw_letters.id" in issued_sql(
            mock_session
        )


class TestThrowLetterCategoryRepository:
    def test_implements_protocol(self, mock_session):
        repository = ThrowLetterCategoryRepository(mock_session)
        assert isinstance(repository, IThrowLetterCategoryRepository)

    @pytest.mark.asyncio
    async def test_ensure_exists_is_an_idempotent_upsert(self, mock_session):
        await ThrowLetterCategoryRepository(mock_session).ensure_exists()

        sql = issued_sql(mock_session)
        assert sql.startswith("INSERT INTO throw_letter_categories")
        assert "ON CONFLICT (id) DO NOTHING" in sql

    @pytest.mark.asyncio
    async def test_increment_upserts_and_returns_new_count(self, mock_session):
        upsert_result = MagicMock()
        upsert_result.scalar_one.return_value = 3
        mock_session.execute.side_effect = [MagicMock(), upsert_result]

        count = await ThrowLetterCategoryRepository(mock_session).increment("career")

        assert count == 3
        assert "ON CONFLICT (id) DO NOTHING" in issued_sql(mock_session, 0)
        sql = issued_sql(mock_session, 1)
        assert "ON CONFLICT (tally_id, category_name) DO UPDATE" in sql
        assert "throw_letter_category_counts.thrown_count +" in sql
        assert "RETURNING throw_letter_category_counts.thrown_count" in sql

    @pytest.mark.asyncio
    async def test_get_builds_counts(self, mock_session):
        result = MagicMock()
        result.all.return_value = [
            SimpleNamespace(category_name="career", thrown_count=2),
            SimpleNamespace(category_name="study", thrown_count=1),
        ]
        mock_session.execute.return_value = result

        tally = await ThrowLetterCategoryRepository(mock_session).get()

        assert tally.id == 1
        assert tally.counts == {"career": 2, "study": 1}
