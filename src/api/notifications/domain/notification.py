"""Notification entity."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from iam.domain.value_objects import UserId
from shared_kernel.identifiers import UlidIdentifier


@dataclass(frozen=True)
class NotificationId(UlidIdentifier):
    """Identifier for a Notification."""


@dataclass(frozen=True)
class Notification:
    """A message addressed to one user.

    Notifications are appended and deleted in bulk; the only change a
    stored notification undergoes is being marked as sent.
    """

    id: NotificationId
    user_id: UserId
    message: str
    created_at: datetime
    is_sent: bool = False

    @classmethod
    def create(
        cls, user_id: UserId, message: str, now: datetime | None = None
    ) -> Notification:
        """Factory method for a new, unsent notification.

        Raises:
            ValueError: If the message is blank
        """
        if not message.strip():
            raise ValueError("A notification needs a message")

        return cls(
            id=NotificationId.generate(),
            user_id=user_id,
            message=message,
            created_at=now or datetime.now(UTC),
        )
