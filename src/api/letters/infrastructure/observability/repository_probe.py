"""Domain probes for letters repository operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class LetterStatusRepositoryProbe(Protocol):
    """Domain probe for letter thread persistence."""

    def letter_status_saved(self, letter_status_id: str) -> None:
        """Record that a new thread was inserted."""
        ...

    def letter_status_not_found(self, lookup: str) -> None:
        """Record that a thread lookup found nothing."""
        ...

    def reply_conflict(self, letter_status_id: str) -> None:
        """Record that a reply lost the race against an earlier one."""
        ...

    def flag_set(self, letter_status_id: str, flag: str, changed: bool) -> None:
        """Record a flag update and whether it changed anything."""
        ...

    def letters_listed(self, user_id: str, list_type: str, count: int) -> None:
        """Record that a page of a user's letter list was read."""
        ...

    def with_context(self, context: ObservationContext) -> LetterStatusRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class ThrowLetterRepositoryProbe(Protocol):
    """Domain probe for throw audit and tally persistence."""

    def throw_recorded(self, throw_letter_id: str, letter_status_id: str) -> None:
        """Record that a throw audit record was appended."""
        ...

    def category_incremented(self, category_name: str, count: int) -> None:
        """Record the new count of a category after a throw."""
        ...

    def with_context(self, context: ObservationContext) -> ThrowLetterRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class _StructlogProbe:
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


class DefaultLetterStatusRepositoryProbe(_StructlogProbe):
    """Default implementation of LetterStatusRepositoryProbe using structlog."""

    def with_context(
        self, context: ObservationContext
    ) -> DefaultLetterStatusRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultLetterStatusRepositoryProbe(logger=self._logger, context=context)

    def letter_status_saved(self, letter_status_id: str) -> None:
        self._logger.info(
            "letter_status_saved",
            letter_status_id=letter_status_id,
            **self._get_context_kwargs(),
        )

    def letter_status_not_found(self, lookup: str) -> None:
        self._logger.debug(
            "letter_status_not_found",
            lookup=lookup,
            **self._get_context_kwargs(),
        )

    def reply_conflict(self, letter_status_id: str) -> None:
        self._logger.warning(
            "reply_conflict",
            letter_status_id=letter_status_id,
            **self._get_context_kwargs(),
        )

    def flag_set(self, letter_status_id: str, flag: str, changed: bool) -> None:
        self._logger.debug(
            "letter_status_flag_set",
            letter_status_id=letter_status_id,
            flag=flag,
            changed=changed,
            **self._get_context_kwargs(),
        )

    def letters_listed(self, user_id: str, list_type: str, count: int) -> None:
        self._logger.debug(
            "letters_listed",
            user_id=user_id,
            list_type=list_type,
            count=count,
            **self._get_context_kwargs(),
        )


class DefaultThrowLetterRepositoryProbe(_StructlogProbe):
    """Default implementation of ThrowLetterRepositoryProbe using structlog."""

    def with_context(
        self, context: ObservationContext
    ) -> DefaultThrowLetterRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultThrowLetterRepositoryProbe(logger=self._logger, context=context)

    def throw_recorded(self, throw_letter_id: str, letter_status_id: str) -> None:
        self._logger.info(
            "throw_recorded",
            throw_letter_id=throw_letter_id,
            letter_status_id=letter_status_id,
            **self._get_context_kwargs(),
        )

    def category_incremented(self, category_name: str, count: int) -> None:
        self._logger.info(
            "throw_category_incremented",
            category_name=category_name,
            count=count,
            **self._get_context_kwargs(),
        )
