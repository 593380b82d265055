"""SQLAlchemy ORM models for IAM reference data (birds, categories)."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base


class BirdModel(Base):
    """ORM model for birds table."""

    __tablename__ = "birds"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<BirdModel(id={self.id}, name={self.name})>"


class CategoryModel(Base):
    """ORM model for categories table."""

    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<CategoryModel(id={self.id}, name={self.name})>"
