"""SQLAlchemy ORM model for the notifications bounded context."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base


class NotificationModel(Base):
    """ORM model for notifications table.

    The (user_id, created_at, id) index serves the per-user listing in
    insertion order and the bulk delete.
    """

    __tablename__ = "notifications"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    is_sent: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    __table_args__ = (
        Index("ix_notifications_user_id_created_at", "user_id", "created_at", "id"),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<NotificationModel(id={self.id}, user_id={self.user_id})>"
