"""Protocol for letter application service observability.

Defines the interface for domain probes that capture the lifecycle of a
letter thread: submission, reply, views, saves and thanks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class LetterServiceProbe(Protocol):
    """Domain probe for letter application service operations."""

    def letter_submitted(
        self,
        letter_status_id: str,
        mentee_id: str,
        mentor_id: str,
        category: str,
        remaining_quota: int,
    ) -> None:
        """Record that a mentee sent a letter."""
        ...

    def letter_replied(
        self, letter_status_id: str, mentor_id: str, remaining_quota: int
    ) -> None:
        """Record that a mentor answered a letter."""
        ...

    def letter_viewed(
        self, letter_status_id: str, user_id: str, first_view: bool
    ) -> None:
        """Record that a participant opened a thread."""
        ...

    def letter_saved(self, letter_status_id: str, user_id: str) -> None:
        """Record that a participant saved a thread."""
        ...

    def mentor_thanked(self, letter_status_id: str, changed: bool) -> None:
        """Record that a mentee thanked the mentor."""
        ...

    def operation_failed(self, operation: str, error: str) -> None:
        """Record that a letter operation failed."""
        ...

    def with_context(self, context: ObservationContext) -> LetterServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultLetterServiceProbe:
    """Default implementation of LetterServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultLetterServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultLetterServiceProbe(logger=self._logger, context=context)

    def letter_submitted(
        self,
        letter_status_id: str,
        mentee_id: str,
        mentor_id: str,
        category: str,
        remaining_quota: int,
    ) -> None:
        """Record that a mentee sent a letter."""
        self._logger.info(
            "letter_submitted",
            letter_status_id=letter_status_id,
            mentee_id=mentee_id,
            mentor_id=mentor_id,
            category=category,
            remaining_quota=remaining_quota,
            **self._get_context_kwargs(),
        )

    def letter_replied(
        self, letter_status_id: str, mentor_id: str, remaining_quota: int
    ) -> None:
        """Record that a mentor answered a letter."""
        self._logger.info(
            "letter_replied",
            letter_status_id=letter_status_id,
            mentor_id=mentor_id,
            remaining_quota=remaining_quota,
            **self._get_context_kwargs(),
        )

    def letter_viewed(
        self, letter_status_id: str, user_id: str, first_view: bool
    ) -> None:
        self._logger.debug(
            "letter_viewed",
            letter_status_id=letter_status_id,
            user_id=user_id,
            first_view=first_view,
            **self._get_context_kwargs(),
        )

    def letter_saved(self, letter_status_id: str, user_id: str) -> None:
        self._logger.info(
            "letter_saved",
            letter_status_id=letter_status_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def mentor_thanked(self, letter_status_id: str, changed: bool) -> None:
        self._logger.info(
            "mentor_thanked",
            letter_status_id=letter_status_id,
            changed=changed,
            **self._get_context_kwargs(),
        )

    def operation_failed(self, operation: str, error: str) -> None:
        """Record that a letter operation failed."""
        self._logger.error(
            "letter_operation_failed",
            operation=operation,
            error=error,
            **self._get_context_kwargs(),
        )
