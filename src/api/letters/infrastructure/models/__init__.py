"""SQLAlchemy ORM models for the letters bounded context."""

from letters.infrastructure.models.letter import LetterModel, LetterStatusModel
from letters.infrastructure.models.throw_letter import (
    ThrowLetterCategoryCountModel,
    ThrowLetterCategoryModel,
    ThrowLetterModel,
)

__all__ = [
    "LetterModel",
    "LetterStatusModel",
    "ThrowLetterCategoryCountModel",
    "ThrowLetterCategoryModel",
    "ThrowLetterModel",
]
