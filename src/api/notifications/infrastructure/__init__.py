"""Infrastructure layer for the notifications context."""

from notifications.infrastructure.models import NotificationModel
from notifications.infrastructure.notification_repository import (
    NotificationRepository,
)

__all__ = ["NotificationModel", "NotificationRepository"]
