"""SQLAlchemy ORM models for letters and letter threads."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class LetterModel(Base):
    """ORM model for letters table.

    Rows are inserted once and never updated.
    """

    __tablename__ = "letters"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    category_name: Mapped[str] = mapped_column(String(100), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    written_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<LetterModel(id={self.id}, category_name={self.category_name})>"


class LetterStatusModel(Base, TimestampMixin):
    """ORM model for letter_statuses table.

    Notes:
    - mentee_letter_id and mentor_letter_id are unique: a letter belongs to
      at most one thread
    - mentor_letter_id is NULL until the mentor replies
    - mentee_id / mentor_id are indexed for the per-user letter lists
    """

    __tablename__ = "letter_statuses"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    mentee_letter_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("letters.id", ondelete="RESTRICT"),
        nullable=False,
        unique=True,
    )
    mentor_letter_id: Mapped[str | None] = mapped_column(
        String(26),
        ForeignKey("letters.id", ondelete="RESTRICT"),
        nullable=True,
        unique=True,
    )
    mentee_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    mentor_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    mentee_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    mentor_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    mentee_saved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    mentor_saved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    thanked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<LetterStatusModel(id={self.id}, mentee_id={self.mentee_id}, "
            f"mentor_id={self.mentor_id})>"
        )
