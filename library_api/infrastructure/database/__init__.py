"""Database engine, session and schema bootstrap."""

from .models import IntegerIdMixin
from .session import Base, async_session, create_tables, dispose_engine, ensure_database, local_session

__all__ = [
    "Base",
    "IntegerIdMixin",
    "async_session",
    "create_tables",
    "dispose_engine",
    "ensure_database",
    "local_session",
]
