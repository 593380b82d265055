"""Ports (interfaces) for the notifications bounded context."""

from notifications.ports.exceptions import NotificationNotFoundError
from notifications.ports.repositories import INotificationRepository

__all__ = ["INotificationRepository", "NotificationNotFoundError"]
