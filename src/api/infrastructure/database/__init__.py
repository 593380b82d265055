"""Database infrastructure - shared engine, sessions and declarative base."""

from infrastructure.database.metadata import load_all_models
from infrastructure.database.models import Base, TimestampMixin, utc_now
from infrastructure.database.sessions import (
    close_database_connections,
    get_engine,
    get_sessionmaker,
    session_scope,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "close_database_connections",
    "get_engine",
    "get_sessionmaker",
    "load_all_models",
    "session_scope",
    "utc_now",
]
