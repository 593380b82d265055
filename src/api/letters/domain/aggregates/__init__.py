"""Domain aggregates for the letters context."""

from letters.domain.aggregates.letter import Letter
from letters.domain.aggregates.letter_status import LetterStatus
from letters.domain.aggregates.throw_letter import (
    CATEGORY_TALLY_ID,
    ThrowLetter,
    ThrowLetterCategory,
)

__all__ = [
    "CATEGORY_TALLY_ID",
    "Letter",
    "LetterStatus",
    "ThrowLetter",
    "ThrowLetterCategory",
]
