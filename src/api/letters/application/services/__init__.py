"""Application services for the letters bounded context."""

from letters.application.services.letter_service import LetterService
from letters.application.services.throw_service import ThrowService

__all__ = ["LetterService", "ThrowService"]
