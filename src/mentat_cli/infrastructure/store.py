"""Store handle opened by ``.open`` and released by ``.close``.

A store is a SQLite database reached through a SQLAlchemy Core engine.
The shell only owns the connection lifecycle; schema, querying and
transacting belong to the engine plugged in through the hooks in
:mod:`mentat_cli.plugins.hookspecs`.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from mentat_cli.errors import StoreError

logger = logging.getLogger(__name__)

MEMORY_PATH = ":memory:"


def create_store_engine(path: str, *, wal: bool = True) -> Engine:
    """Create a SQLite engine for *path* with foreign keys enabled.

    ``":memory:"`` yields a single shared in-memory connection. File
    databases use WAL journaling when *wal* is set.
    """
    if path == MEMORY_PATH:
        engine = create_engine(
            "sqlite://",
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        # URL.create keeps "?" and "#" in the filename instead of parsing them.
        engine = create_engine(URL.create("sqlite", database=path), echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        if wal and path != MEMORY_PATH:
            cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


class Store:
    """An open database plus the path it was opened from."""

    def __init__(self, path: str, engine: Engine) -> None:
        self.path = path
        self._engine: Engine | None = engine

    @classmethod
    def open(cls, path: str, *, wal: bool = True) -> Store:
        """Open the database at *path*, connecting once to verify it.

        Raises:
            StoreError: The database could not be opened.
        """
        engine: Engine | None = None
        try:
            engine = create_store_engine(path, wal=wal)
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            if engine is not None:
                engine.dispose()
            reason = getattr(exc, "orig", None) or exc
            raise StoreError(f"Unable to open database at {path}: {reason}") from exc
        logger.debug("Opened store at %s", path)
        return cls(path, engine)

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Engine:
        """The SQLAlchemy engine.

        Raises:
            StoreError: The store has been closed.
        """
        if self._engine is None:
            raise StoreError(f"Store at {self.path} is closed")
        return self._engine

    def close(self) -> None:
        """Dispose the engine. Safe to call more than once."""
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        logger.debug("Closed store at %s", self.path)
