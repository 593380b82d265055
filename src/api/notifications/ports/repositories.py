"""Repository protocol (port) for the notifications bounded context."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from iam.domain.value_objects import UserId
from notifications.domain import Notification, NotificationId


@runtime_checkable
class INotificationRepository(Protocol):
    """Repository for per-user notifications."""

    async def append(self, notification: Notification) -> None:
        """Insert a notification."""
        ...

    async def list_by_user(self, user_id: UserId) -> list[Notification]:
        """List a user's notifications in insertion order.

        Insertion order is created_at, with the ID breaking ties.
        """
        ...

    async def delete_all_by_user(self, user_id: UserId) -> int:
        """Delete every notification of a user.

        Returns:
            The number of notifications removed
        """
        ...

    async def mark_sent(self, notification_id: NotificationId) -> Notification | None:
        """Set the sent flag.

        Returns:
            The updated notification, or None if it does not exist
        """
        ...
