"""Key/value storage backends for saved games."""

import logging
from pathlib import Path
from typing import Protocol

from sqlalchemy.orm import Session

from .base import get_engine, get_session, init_db
from .models import StorageEntryModel


class Storage(Protocol):
    """Protocol describing where game snapshots are kept."""

    def get_item(self, key: str) -> str | None:
        """Return the value stored under *key* or ``None``."""

    def set_item(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""

    def remove_item(self, key: str) -> None:
        """Delete *key* if present."""


class InMemoryStorage:
    """Trivial in-memory implementation of :class:`Storage`."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def __len__(self) -> int:
        return len(self._items)


class SqlStorage:
    """SQLAlchemy-backed implementation of :class:`Storage`.

    Attributes:
        session: SQLAlchemy database session.
    """

    def __init__(self, session: Session) -> None:
        """Initialize storage.

        Args:
            session: Database session.
        """
        self.session = session
        self.logger = logging.getLogger(__name__)

    @classmethod
    def from_path(cls, db_path: Path | str | None = None) -> "SqlStorage":
        """Open storage on a SQLite file, creating tables as needed."""
        engine = get_engine(db_path)
        init_db(engine)
        return cls(get_session(engine))

    def get_item(self, key: str) -> str | None:
        entry = self.session.get(StorageEntryModel, key)
        return entry.value if entry else None

    def set_item(self, key: str, value: str) -> None:
        entry = self.session.get(StorageEntryModel, key)
        if entry:
            entry.value = value
        else:
            self.session.add(StorageEntryModel(key=key, value=value))
        self.session.commit()
        self.logger.debug(f"Stored {len(value)} bytes under {key}")

    def remove_item(self, key: str) -> None:
        entry = self.session.get(StorageEntryModel, key)
        if entry:
            self.session.delete(entry)
            self.session.commit()

    def close(self) -> None:
        self.session.close()
