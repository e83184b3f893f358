"""Storage layer for Nardis saved games."""

from .base import Base, get_engine, get_session, init_db
from .storage import InMemoryStorage, SqlStorage, Storage

__all__ = [
    "Base",
    "get_engine",
    "get_session",
    "init_db",
    "InMemoryStorage",
    "SqlStorage",
    "Storage",
]
