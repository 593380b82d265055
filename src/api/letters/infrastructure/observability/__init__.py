"""Domain-Oriented Observability for letters infrastructure."""

from letters.infrastructure.observability.repository_probe import (
    DefaultLetterStatusRepositoryProbe,
    DefaultThrowLetterRepositoryProbe,
    LetterStatusRepositoryProbe,
    ThrowLetterRepositoryProbe,
)

__all__ = [
    "DefaultLetterStatusRepositoryProbe",
    "DefaultThrowLetterRepositoryProbe",
    "LetterStatusRepositoryProbe",
    "ThrowLetterRepositoryProbe",
]
