"""Ports (interfaces) for the letters bounded context."""

from letters.ports.read_models import LetterSummary
from letters.ports.repositories import (
    ILetterRepository,
    ILetterStatusRepository,
    IThrowLetterCategoryRepository,
    IThrowLetterRepository,
)

__all__ = [
    "ILetterRepository",
    "ILetterStatusRepository",
    "IThrowLetterCategoryRepository",
    "IThrowLetterRepository",
    "LetterSummary",
]
