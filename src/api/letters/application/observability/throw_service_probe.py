"""Protocol for throw service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ThrowServiceProbe(Protocol):
    """Domain probe for throwing and re-routing letters."""

    def letter_thrown(
        self,
        letter_status_id: str,
        thrown_by: str,
        category: str,
        category_count: int,
    ) -> None:
        """Record that a mentor threw a letter."""
        ...

    def mentor_reassigned(
        self, letter_status_id: str, previous_mentor_id: str, new_mentor_id: str
    ) -> None:
        """Record that a thread was routed to another mentor."""
        ...

    def throw_failed(self, letter_status_id: str, error: str) -> None:
        """Record that a throw or reassignment failed."""
        ...

    def category_tally_ensured(self) -> None:
        """Record that the category tally exists."""
        ...

    def with_context(self, context: ObservationContext) -> ThrowServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultThrowServiceProbe:
    """Default implementation of ThrowServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultThrowServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultThrowServiceProbe(logger=self._logger, context=context)

    def letter_thrown(
        self,
        letter_status_id: str,
        thrown_by: str,
        category: str,
        category_count: int,
    ) -> None:
        self._logger.info(
            "letter_thrown",
            letter_status_id=letter_status_id,
            thrown_by=thrown_by,
            category=category,
            category_count=category_count,
            **self._get_context_kwargs(),
        )

    def mentor_reassigned(
        self, letter_status_id: str, previous_mentor_id: str, new_mentor_id: str
    ) -> None:
        self._logger.info(
            "mentor_reassigned",
            letter_status_id=letter_status_id,
            previous_mentor_id=previous_mentor_id,
            new_mentor_id=new_mentor_id,
            **self._get_context_kwargs(),
        )

    def throw_failed(self, letter_status_id: str, error: str) -> None:
        self._logger.error(
            "throw_failed",
            letter_status_id=letter_status_id,
            error=error,
            **self._get_context_kwargs(),
        )

    def category_tally_ensured(self) -> None:
        self._logger.debug("category_tally_ensured", **self._get_context_kwargs())
