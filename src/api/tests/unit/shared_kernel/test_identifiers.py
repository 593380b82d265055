"""Unit tests for ULID-backed identifiers."""

import pytest

from iam.domain.value_objects import UserId
from letters.domain.value_objects import LetterStatusId


class TestUlidIdentifier:
    def test_generate_produces_26_char_ulid(self):
        assert len(UserId.generate().value) == 26

    def test_from_string_round_trip(self):
        original = LetterStatusId.generate()

        assert LetterStatusId.from_string(original.value) == original

    def test_from_string_rejects_garbage(self):
        with pytest.raises(ValueError, match="Invalid LetterStatusId"):
            LetterStatusId.from_string("not-a-ulid")

    def test_str_is_value(self):
        user_id = UserId.generate()

        assert str(user_id) == user_id.value

