"""SQLAlchemy ORM models for throw audit records and the category tally."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class ThrowLetterModel(Base):
    """ORM model for throw_letters table (append-only)."""

    __tablename__ = "throw_letters"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    letter_status_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("letter_statuses.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    thrown_by: Mapped[str] = mapped_column(
        String(26), ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    )
    thrown_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<ThrowLetterModel(id={self.id}, "
            f"letter_status_id={self.letter_status_id}, thrown_by={self.thrown_by})>"
        )


class ThrowLetterCategoryModel(Base, TimestampMixin):
    """ORM model for the singleton throw_letter_categories row."""

    __tablename__ = "throw_letter_categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)


class ThrowLetterCategoryCountModel(Base):
    """ORM model for throw_letter_category_counts (one row per category)."""

    __tablename__ = "throw_letter_category_counts"

    tally_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("throw_letter_categories.id", ondelete="CASCADE"),
        primary_key=True,
    )
    category_name: Mapped[str] = mapped_column(String(100), primary_key=True)
    thrown_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<ThrowLetterCategoryCountModel(category_name={self.category_name}, "
            f"thrown_count={self.thrown_count})>"
        )
