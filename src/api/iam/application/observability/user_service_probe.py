"""Protocol for user application service observability.

Defines the interface for domain probes that capture registration and
nickname events for the user service.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class UserServiceProbe(Protocol):
    """Domain probe for user application service operations."""

    def registration_completed(
        self,
        user_id: str,
        role: str,
        category: str,
    ) -> None:
        """Record that a user completed registration."""
        ...

    def registration_failed(
        self,
        user_id: str,
        error: str,
    ) -> None:
        """Record that registration failed."""
        ...

    def nickname_checked(self, nickname: str, available: bool) -> None:
        """Record a nickname availability check."""
        ...

    def with_context(self, context: ObservationContext) -> UserServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserServiceProbe:
    """Default implementation of UserServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultUserServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserServiceProbe(logger=self._logger, context=context)

    def registration_completed(
        self,
        user_id: str,
        role: str,
        category: str,
    ) -> None:
        """Record that a user completed registration."""
        self._logger.info(
            "registration_completed",
            user_id=user_id,
            role=role,
            category=category,
            **self._get_context_kwargs(),
        )

    def registration_failed(
        self,
        user_id: str,
        error: str,
    ) -> None:
        """Record that registration failed."""
        self._logger.error(
            "registration_failed",
            user_id=user_id,
            error=error,
            **self._get_context_kwargs(),
        )

    def nickname_checked(self, nickname: str, available: bool) -> None:
        """Record a nickname availability check."""
        self._logger.debug(
            "nickname_checked",
            nickname=nickname,
            available=available,
            **self._get_context_kwargs(),
        )
