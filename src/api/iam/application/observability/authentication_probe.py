"""Protocol for authentication observability.

Defines the interface for domain probes that capture the OAuth sign-up and
login events of AuthService.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AuthenticationProbe(Protocol):
    """Domain probe for authentication operations."""

    def user_signed_up(self, user_id: str, provider: str) -> None:
        """Record that a first-time user was created from a provider profile."""
        ...

    def user_logged_in(self, user_id: str, provider: str) -> None:
        """Record that a known user logged in."""
        ...

    def authentication_failed(self, reason: str, error: str) -> None:
        """Record authentication failure.

        Args:
            reason: Exception class name (e.g. ProviderUnavailableError)
            error: Error message
        """
        ...

    def with_context(self, context: ObservationContext) -> AuthenticationProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAuthenticationProbe:
    """Default implementation of AuthenticationProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAuthenticationProbe:
        """Create a new probe with observation context bound."""
        return DefaultAuthenticationProbe(logger=self._logger, context=context)

    def user_signed_up(self, user_id: str, provider: str) -> None:
        """Record that a first-time user was created."""
        self._logger.info(
            "user_signed_up",
            user_id=user_id,
            provider=provider,
            **self._get_context_kwargs(),
        )

    def user_logged_in(self, user_id: str, provider: str) -> None:
        """Record that a known user logged in."""
        self._logger.info(
            "user_logged_in",
            user_id=user_id,
            provider=provider,
            **self._get_context_kwargs(),
        )

    def authentication_failed(self, reason: str, error: str) -> None:
        """Record authentication failure."""
        self._logger.warning(
            "authentication_failed",
            reason=reason,
            error=error,
            **self._get_context_kwargs(),
        )
