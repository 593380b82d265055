"""Domain probe for calls to the OAuth provider."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class OAuthClientProbe(Protocol):
    """Domain probe for OAuth provider calls."""

    def token_exchanged(self, provider: str) -> None:
        """Record that an authorization code was exchanged for a token."""
        ...

    def profile_fetched(self, provider: str, provider_id: str) -> None:
        """Record that a profile was fetched."""
        ...

    def provider_rejected(self, provider: str, operation: str, status_code: int) -> None:
        """Record that the provider answered with a client error."""
        ...

    def provider_unavailable(self, provider: str, operation: str, error: str) -> None:
        """Record that the provider could not be reached or failed."""
        ...

    def with_context(self, context: ObservationContext) -> OAuthClientProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultOAuthClientProbe:
    """Default implementation of OAuthClientProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultOAuthClientProbe:
        """Create a new probe with observation context bound."""
        return DefaultOAuthClientProbe(logger=self._logger, context=context)

    def token_exchanged(self, provider: str) -> None:
        self._logger.debug(
            "oauth_token_exchanged",
            provider=provider,
            **self._get_context_kwargs(),
        )

    def profile_fetched(self, provider: str, provider_id: str) -> None:
        self._logger.debug(
            "oauth_profile_fetched",
            provider=provider,
            provider_id=provider_id,
            **self._get_context_kwargs(),
        )

    def provider_rejected(self, provider: str, operation: str, status_code: int) -> None:
        self._logger.warning(
            "oauth_provider_rejected",
            provider=provider,
            operation=operation,
            status_code=status_code,
            **self._get_context_kwargs(),
        )

    def provider_unavailable(self, provider: str, operation: str, error: str) -> None:
        self._logger.error(
            "oauth_provider_unavailable",
            provider=provider,
            operation=operation,
            error=error,
            **self._get_context_kwargs(),
        )
