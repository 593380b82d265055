"""Protocol for notification service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class NotificationServiceProbe(Protocol):
    """Domain probe for notification operations."""

    def notification_appended(self, notification_id: str, user_id: str) -> None:
        """Record that a notification was stored."""
        ...

    def notifications_deleted(self, user_id: str, count: int) -> None:
        """Record a bulk delete and how many rows it removed."""
        ...

    def notification_sent(self, notification_id: str) -> None:
        """Record that a notification was marked as sent."""
        ...

    def with_context(self, context: ObservationContext) -> NotificationServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultNotificationServiceProbe:
    """Default implementation of NotificationServiceProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultNotificationServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultNotificationServiceProbe(logger=self._logger, context=context)

    def notification_appended(self, notification_id: str, user_id: str) -> None:
        self._logger.debug(
            "notification_appended",
            notification_id=notification_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def notifications_deleted(self, user_id: str, count: int) -> None:
        self._logger.info(
            "notifications_deleted",
            user_id=user_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def notification_sent(self, notification_id: str) -> None:
        self._logger.debug(
            "notification_sent",
            notification_id=notification_id,
            **self._get_context_kwargs(),
        )
