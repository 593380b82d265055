"""Application layer for the notifications context."""

from notifications.application.services import NotificationService

__all__ = ["NotificationService"]
