"""Domain layer for the notifications context."""

from notifications.domain.notification import Notification, NotificationId

__all__ = ["Notification", "NotificationId"]
