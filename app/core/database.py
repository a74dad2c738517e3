"""Database configuration and session management for SQLite.

This module configures the SQLite database engine that backs the event
store. Every request works in its own session, and a mutation's load,
authorization check and batch write are committed together in that
session's transaction.

SQLite Configuration Choices:
    - **WAL (Write-Ahead Logging)**: Allows concurrent readers while a batch
      update or delete is being written, so listing requests are not blocked
      by series-wide mutations.

    - **Foreign Keys**: Disabled by default in SQLite. We enable it so a
      participant row can never outlive the event it belongs to.

    - **check_same_thread=False**: Required for FastAPI, whose dependency
      injection may hand a session to a different worker thread.
"""

from sqlalchemy import event as sa_event
from sqlmodel import Session, SQLModel, create_engine

from app.core.config import settings

connect_args = {"check_same_thread": False}

engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    echo=settings.debug,  # Log SQL statements when DEBUG=true
)


@sa_event.listens_for(engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Configure SQLite pragmas on each new connection.

    These settings are connection-level, not database-level, so they must
    be set each time a new connection is established from the pool.
    """
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_and_tables():
    """Create all database tables."""
    SQLModel.metadata.create_all(engine)


def get_session():
    """Dependency for getting database session."""
    with Session(engine) as session:
        yield session
