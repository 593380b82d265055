"""Notification application service."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.value_objects import UserId
from notifications.application.observability import (
    DefaultNotificationServiceProbe,
    NotificationServiceProbe,
)
from notifications.domain import Notification, NotificationId
from notifications.ports.exceptions import NotificationNotFoundError
from notifications.ports.repositories import INotificationRepository


class NotificationService:
    """Application service for the per-user notification log."""

    def __init__(
        self,
        session: AsyncSession,
        notification_repository: INotificationRepository,
        probe: NotificationServiceProbe | None = None,
    ):
        self._session = session
        self._notification_repository = notification_repository
        self._probe = probe or DefaultNotificationServiceProbe()

    async def append(self, user_id: UserId, message: str) -> Notification:
        """Store a new, unsent notification for a user.

        Raises:
            ValueError: If the message is blank
        """
        notification = Notification.create(user_id, message, now=datetime.now(UTC))
        async with self._session.begin():
            await self._notification_repository.append(notification)

        self._probe.notification_appended(notification.id.value, user_id.value)
        return notification

    async def list_notifications(self, user_id: UserId) -> list[Notification]:
        """List a user's notifications, oldest first."""
        return await self._notification_repository.list_by_user(user_id)

    async def delete_all(self, user_id: UserId) -> int:
        """Irreversibly delete every notification of a user.

        Returns:
            The number of notifications removed
        """
        async with self._session.begin():
            count = await self._notification_repository.delete_all_by_user(user_id)

        self._probe.notifications_deleted(user_id.value, count)
        return count

    async def mark_sent(self, notification_id: NotificationId) -> Notification:
        """Mark a notification as delivered. Repeating this is a no-op.

        Raises:
            NotificationNotFoundError: If the notification does not exist
        """
        async with self._session.begin():
            notification = await self._notification_repository.mark_sent(
                notification_id
            )
            if notification is None:
                raise NotificationNotFoundError(
                    f"Notification {notification_id.value} does not exist"
                )

        self._probe.notification_sent(notification_id.value)
        return notification
