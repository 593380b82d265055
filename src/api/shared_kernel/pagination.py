"""Pagination primitives shared across bounded contexts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One fixed-size page of an ordered result set.

    Page numbers are 1-based.
    """

    items: list[T] = field(default_factory=list)
    page_number: int = 1
    page_size: int = 10
    total_elements: int = 0

    @property
    def total_pages(self) -> int:
        """Number of pages needed to hold every element."""
        if self.total_elements == 0:
            return 0
        return -(-self.total_elements // self.page_size)

    @property
    def has_next(self) -> bool:
        """Whether a page follows this one."""
        return self.page_number < self.total_pages

    @property
    def is_last(self) -> bool:
        """Whether this is the final page (or the result set is empty)."""
        return not self.has_next

    @staticmethod
    def offset_for(page_number: int, page_size: int) -> int:
        """Row offset of the first element on ``page_number``.

        Raises:
            ValueError: If page_number is smaller than 1
        """
        if page_number < 1:
            raise ValueError(f"Page numbers start at 1, got {page_number}")
        return (page_number - 1) * page_size
