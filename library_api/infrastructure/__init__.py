"""Infrastructure module for the application."""

from .config import get_settings
from .database.session import async_session, create_tables, dispose_engine, ensure_database

__all__ = [
    "async_session",
    "create_tables",
    "dispose_engine",
    "ensure_database",
    "get_settings",
]
