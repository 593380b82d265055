"""Domain-Oriented Observability for the letters application layer."""

from letters.application.observability.letter_service_probe import (
    DefaultLetterServiceProbe,
    LetterServiceProbe,
)
from letters.application.observability.throw_service_probe import (
    DefaultThrowServiceProbe,
    ThrowServiceProbe,
)

__all__ = [
    "DefaultLetterServiceProbe",
    "DefaultThrowServiceProbe",
    "LetterServiceProbe",
    "ThrowServiceProbe",
]
