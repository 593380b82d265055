"""SQLAlchemy ORM model for the users table."""

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class UserModel(Base, TimestampMixin):
    """ORM model for users table.

    Notes:
    - role is NULL until the user completes registration
    - quota carries a CHECK (quota >= 0); UserRepository decrements it
      conditionally so the check never fires in normal operation
    - (provider, provider_id) is unique; the constraint name is matched when
      translating IntegrityError into DuplicateProviderIdentityError
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    provider: Mapped[str] = mapped_column(String(32), nullable=False)
    provider_id: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    nickname: Mapped[str | None] = mapped_column(
        String(100), nullable=True, index=True
    )
    birth_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    role: Mapped[str | None] = mapped_column(String(16), nullable=True)
    bird_id: Mapped[str | None] = mapped_column(
        String(26), ForeignKey("birds.id", ondelete="RESTRICT"), nullable=True
    )
    category_id: Mapped[str | None] = mapped_column(
        String(26), ForeignKey("categories.id", ondelete="RESTRICT"), nullable=True
    )
    quota: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    signed_up_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    last_login_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    refresh_token: Mapped[str | None] = mapped_column(String(512), nullable=True)

    __table_args__ = (
        UniqueConstraint("provider", "provider_id"),
        CheckConstraint("quota >= 0", name="quota_non_negative"),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<UserModel(id={self.id}, provider={self.provider}, "
            f"nickname={self.nickname}, role={self.role})>"
        )
