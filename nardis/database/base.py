"""Database base configuration for Nardis."""

from pathlib import Path

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from nardis.config import Settings


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""


def get_engine(db_path: Path | str | None = None) -> Engine:
    """Create a database engine.

    Args:
        db_path: Path to the SQLite database file. If None, uses
            NARDIS_DATABASE_PATH from env or the default.

    Returns:
        SQLAlchemy engine.
    """
    if db_path is None:
        db_path = Settings.from_env().database_path

    # Ensure directory exists
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    return create_engine(f"sqlite:///{db_path}", echo=False)


def init_db(engine: Engine) -> None:
    """Create all tables on an engine."""
    Base.metadata.create_all(bind=engine)


def get_session(engine: Engine) -> Session:
    """Open a database session bound to an engine."""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    return SessionLocal()
