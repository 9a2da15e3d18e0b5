"""
Database connection and session management.
"""

import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import NullPool

from fintrack.config import get_settings
from fintrack.db.models import Base
from fintrack.db.seed import seed_financial_tips

logger = logging.getLogger(__name__)
settings = get_settings()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_url: str) -> Engine:
    """
    Build the engine for a database URL.

    SQLite connections enforce foreign keys and may be shared across
    threads; hosted Postgres gets NullPool.
    """
    if database_url.startswith("sqlite"):
        sqlite_engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
        )
        event.listen(sqlite_engine, "connect", _enable_sqlite_foreign_keys)
        return sqlite_engine

    if database_url.startswith("postgresql"):
        return create_engine(database_url, poolclass=NullPool)

    return create_engine(database_url)


engine = create_db_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(seed_tips: bool = False):
    """Create missing tables and optionally load the financial tips library."""
    logger.info("Creating database tables")
    Base.metadata.create_all(bind=engine)

    if seed_tips:
        with get_db_context() as db:
            seed_financial_tips(db)


def get_db() -> Generator[Session, None, None]:
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """Context manager for database sessions (for use outside FastAPI)."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
