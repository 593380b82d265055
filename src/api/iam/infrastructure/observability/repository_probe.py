"""Domain probe for IAM repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to user persistence.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class UserRepositoryProbe(Protocol):
    """Domain probe for user repository operations."""

    def user_saved(self, user_id: str, provider: str) -> None:
        """Record that a user was successfully saved."""
        ...

    def user_retrieved(self, user_id: str) -> None:
        """Record that a user was retrieved."""
        ...

    def user_not_found(self, lookup: str) -> None:
        """Record that a user lookup found nothing."""
        ...

    def duplicate_provider_identity(self, provider: str, provider_id: str) -> None:
        """Record that a save collided with an existing provider identity."""
        ...

    def last_login_updated(self, user_id: str) -> None:
        """Record that a user's last login timestamp was updated."""
        ...

    def quota_decremented(self, user_id: str, remaining: int) -> None:
        """Record that one unit of quota was consumed."""
        ...

    def quota_exhausted(self, user_id: str) -> None:
        """Record that a decrement was refused because quota is zero."""
        ...

    def with_context(self, context: ObservationContext) -> UserRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserRepositoryProbe:
    """Default implementation of UserRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultUserRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserRepositoryProbe(logger=self._logger, context=context)

    def user_saved(self, user_id: str, provider: str) -> None:
        """Record that a user was successfully saved."""
        self._logger.info(
            "user_saved",
            user_id=user_id,
            provider=provider,
            **self._get_context_kwargs(),
        )

    def user_retrieved(self, user_id: str) -> None:
        """Record that a user was retrieved."""
        self._logger.debug(
            "user_retrieved",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def user_not_found(self, lookup: str) -> None:
        """Record that a user lookup found nothing."""
        self._logger.debug(
            "user_not_found",
            lookup=lookup,
            **self._get_context_kwargs(),
        )

    def duplicate_provider_identity(self, provider: str, provider_id: str) -> None:
        """Record that a save collided with an existing provider identity."""
        self._logger.warning(
            "duplicate_provider_identity",
            provider=provider,
            provider_id=provider_id,
            **self._get_context_kwargs(),
        )

    def last_login_updated(self, user_id: str) -> None:
        """Record that a user's last login timestamp was updated."""
        self._logger.debug(
            "last_login_updated",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def quota_decremented(self, user_id: str, remaining: int) -> None:
        """Record that one unit of quota was consumed."""
        self._logger.info(
            "quota_decremented",
            user_id=user_id,
            remaining=remaining,
            **self._get_context_kwargs(),
        )

    def quota_exhausted(self, user_id: str) -> None:
        """Record that a decrement was refused because quota is zero."""
        self._logger.warning(
            "quota_exhausted",
            user_id=user_id,
            **self._get_context_kwargs(),
        )
