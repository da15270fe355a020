import logging
import os
import sqlite3

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base

from collabboard.config import settings

logger = logging.getLogger(__name__)

# Default to a local SQLite database if no DATABASE_URL is provided or usable
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.abspath(os.path.join(BASE_DIR, ".."))
DEFAULT_DB_PATH = os.path.join(PROJECT_ROOT, "collabboard.db")


def enable_sqlite_foreign_keys(engine) -> None:
    """Make SQLite honour ``ON DELETE`` actions and reject dangling foreign keys."""

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, _connection_record):  # pragma: no cover - SQLAlchemy callback
        if isinstance(dbapi_connection, sqlite3.Connection):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()


def _build_engine():
    """Create the SQLAlchemy engine, preferring the configured DATABASE_URL."""
    database_url = settings.DATABASE_URL if getattr(settings, "DATABASE_URL", None) else None

    # Attempt to use the configured database URL if available
    if database_url:
        try:
            engine = create_engine(database_url)
            # Ensure the target database is reachable; otherwise fall back to SQLite
            with engine.connect() as connection:  # noqa: F841
                pass
            return engine
        except ModuleNotFoundError as exc:
            # Some SQL drivers (e.g. psycopg2) might be missing in the execution environment.
            logger.warning("Database driver unavailable (%s), falling back to SQLite", exc)
        except Exception as exc:
            # Connection errors or inaccessible databases should not break local development.
            logger.warning("Configured database unreachable (%s), falling back to SQLite", exc)

    # Fall back to SQLite stored in the project root
    sqlite_url = f"sqlite:///{DEFAULT_DB_PATH}"
    engine = create_engine(sqlite_url, connect_args={"check_same_thread": False})
    enable_sqlite_foreign_keys(engine)
    return engine


engine = _build_engine()

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for the models
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
