# =============================================================================
# lib/database.py - SQLAlchemy Engine and Sessions
# =============================================================================
# Builds the engine and session factory from a database URL and exposes
# two ways to open a session:
# - session():     plain session for reads and single-row updates
# - transaction(): session inside BEGIN ... COMMIT, rolled back on any error
#
# Usage:
#   db = Database("sqlite:///data/places.db")
#   with db.transaction() as session:
#       session.add(record)
# =============================================================================

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def _ensure_sqlite_parent_dir(db_url: str) -> None:
    # sqlite:///relative/path.db or sqlite:////abs/path.db
    if not db_url.startswith("sqlite:"):
        return
    if db_url.startswith("sqlite:////"):
        path = db_url.replace("sqlite:////", "/", 1)
    elif db_url.startswith("sqlite:///"):
        path = db_url.replace("sqlite:///", "", 1)
    else:
        return
    if path in (":memory:", ""):
        return
    Path(path).expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores REFERENCES clauses unless enabled per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def create_db_engine(db_url: str) -> Engine:
    _ensure_sqlite_parent_dir(db_url)
    connect_args = {}
    if db_url.startswith("sqlite:"):
        connect_args = {"check_same_thread": False}
    engine = create_engine(db_url, pool_pre_ping=True, connect_args=connect_args)
    if db_url.startswith("sqlite:"):
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


class Database:
    """Owns one engine and hands out request-scoped sessions."""

    def __init__(self, db_url: str):
        self.db_url = db_url
        self.engine = create_db_engine(db_url)
        self._factory = sessionmaker(
            bind=self.engine,
            autoflush=False,
            expire_on_commit=False,
        )

    def create_schema(self) -> None:
        """Create every table registered on Base.metadata that is missing."""
        Base.metadata.create_all(self.engine)
        logger.info(f"Database schema ready ({self.engine.url.get_backend_name()})")

    def session(self) -> Session:
        return self._factory()

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        Yield a session whose work commits as one unit.

        Everything done inside the block commits together when it exits
        normally. Any exception rolls the whole unit back and propagates.
        """
        with self._factory.begin() as session:
            yield session

    def dispose(self) -> None:
        self.engine.dispose()
