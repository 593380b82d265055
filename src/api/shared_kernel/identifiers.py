"""ULID-backed identifier base for aggregate ids."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Self

from ulid import ULID


@dataclass(frozen=True)
class UlidIdentifier:
    """Immutable identifier wrapping a ULID string.

    ULIDs sort by creation time, which keeps ids usable as a tiebreaker for
    "most recent first" orderings. Subclasses only add a name.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> Self:
        """Generate a new identifier using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Create an identifier from its string value.

        Args:
            value: ULID string

        Returns:
            Identifier instance

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid {cls.__name__}: {value}") from e

        return cls(value=value)
