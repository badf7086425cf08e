"""
==============================================================================
Catalog Database Connection Module
==============================================================================

Read-only connection management for the reference catalog using
SQLAlchemy.

This module implements:
- CatalogDatabase: validated dataset path plus a lazily created engine
- One-time, lock-guarded engine initialization
- Per-query timeout and cancellation through SQLite's progress handler
- Mapping of driver failures onto the catalog error taxonomy

Connection Strategy:
-------------------
Python's sqlite3 connections must not be used by several threads at the
same time, so a single shared handle is not an option. Instead the
database owns ONE engine, created exactly once, whose QueuePool hands
each concurrent caller its own read-only connection for the duration of
a query.

    ┌─────────────────┐
    │ CatalogDatabase │ (one per store)
    └────────┬────────┘
             │ created once under lock
    ┌────────▼────────┐
    │     Engine      │ (QueuePool of read-only connections)
    └────────┬────────┘
             │ checked out per query
    ┌────────▼────────┐
    │   Connection    │ (file:...?mode=ro)
    └─────────────────┘

Open Failure Policy:
-------------------
If the engine cannot be created, the caller that triggered it receives
StorageUnavailableError and nothing is cached, so the next call retries.

==============================================================================
"""

from __future__ import annotations

import logging
import sqlite3
import threading
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional, Union

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import QueuePool

from hashcatalog.core.exceptions import (
    CatalogNotFoundError,
    InvalidPathError,
    QueryCancelledError,
    StorageError,
    StorageUnavailableError,
)


# Module logger
logger = logging.getLogger(__name__)

# SQLite VM instructions between cancellation checks
PROGRESS_HANDLER_STEPS = 1000


class QueryGuard:
    """
    Progress handler that interrupts a query on timeout or cancellation.

    SQLite calls the guard every PROGRESS_HANDLER_STEPS instructions; a
    non-zero return aborts the running statement with "interrupted".
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> None:
        self._deadline = time.monotonic() + timeout if timeout else None
        self._cancel_event = cancel_event
        self.tripped = False

    @property
    def active(self) -> bool:
        """True when there is anything to watch for."""
        return self._deadline is not None or self._cancel_event is not None

    def should_abort(self) -> bool:
        if self._cancel_event is not None and self._cancel_event.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def __call__(self) -> int:
        if self.should_abort():
            self.tripped = True
            return 1
        return 0


class CatalogDatabase:
    """
    Read-only access to one reference catalog file.

    The path is validated on construction; the engine is created on first
    use and disposed by close(). Safe to share between threads.

    Attributes:
        path: Absolute path of the dataset file
        is_open: True once the engine exists and close() was not called
        is_closed: True after close()

    Example:
        >>> database = CatalogDatabase("rds/minimal.db")
        >>> with database.connect(timeout=5.0) as conn:
        ...     conn.exec_driver_sql("SELECT count(*) FROM VERSION").scalar()
        1
        >>> database.close()
    """

    def __init__(
        self,
        path: Union[str, Path, None],
        *,
        pool_size: int = 5,
        max_overflow: int = 10,
        pool_timeout: float = 30.0,
    ) -> None:
        """
        Validate the dataset path without opening it.

        Args:
            path: Path to the SQLite catalog file
            pool_size: Read-only connections kept in the pool
            max_overflow: Extra connections allowed under load
            pool_timeout: Seconds to wait for a free connection

        Raises:
            InvalidPathError: If path is None or blank
            CatalogNotFoundError: If no file exists at path
        """
        self._path = self._validate_path(path)
        self._pool_size = pool_size
        self._max_overflow = max_overflow
        self._pool_timeout = pool_timeout

        self._engine: Optional[Engine] = None
        self._lock = threading.Lock()
        self._closed = False

    @staticmethod
    def _validate_path(path: Union[str, Path, None]) -> Path:
        if path is None or not str(path).strip():
            raise InvalidPathError("Catalog database path is empty")

        candidate = Path(path).expanduser()
        if not candidate.is_file():
            raise CatalogNotFoundError(str(path))

        return candidate.resolve()

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def path(self) -> Path:
        """Get the validated dataset path."""
        return self._path

    @property
    def is_open(self) -> bool:
        """Check whether the engine has been created and not closed."""
        return self._engine is not None and not self._closed

    @property
    def is_closed(self) -> bool:
        """Check whether close() has been called."""
        return self._closed

    # =========================================================================
    # ENGINE MANAGEMENT
    # =========================================================================

    def _ensure_engine(self) -> Engine:
        """
        Return the engine, creating it exactly once.

        Raises:
            StorageUnavailableError: If the store is closed or the file
                cannot be opened as a database
        """
        engine = self._engine
        if engine is not None and not self._closed:
            return engine

        with self._lock:
            if self._closed:
                raise StorageUnavailableError("Catalog store has been closed")
            if self._engine is None:
                self._engine = self._create_engine()
            return self._engine

    def _create_engine(self) -> Engine:
        engine = create_engine(
            f"sqlite:///{self._path}",
            creator=self._open_read_only,
            poolclass=QueuePool,
            pool_size=self._pool_size,
            max_overflow=self._max_overflow,
            pool_timeout=self._pool_timeout,
        )

        # Reading the schema cookie touches the file header, which fails
        # for files that are not SQLite databases.
        try:
            with engine.connect() as conn:
                conn.exec_driver_sql("PRAGMA schema_version").scalar()
        except SQLAlchemyError as e:
            engine.dispose()
            logger.error(f"Failed to open catalog database {self._path}: {e}")
            raise StorageUnavailableError(
                f"Could not open catalog database at {self._path}: {_driver_message(e)}"
            ) from e

        logger.info(f"Opened read-only catalog engine: {self._path}")
        return engine

    def _open_read_only(self) -> sqlite3.Connection:
        """Pool creator: one read-only SQLite connection."""
        if self._closed:
            raise StorageUnavailableError("Catalog store has been closed")

        return sqlite3.connect(
            f"{self._path.as_uri()}?mode=ro",
            uri=True,
            check_same_thread=False,
        )

    # =========================================================================
    # CONNECTION MANAGEMENT
    # =========================================================================

    @contextmanager
    def connect(
        self,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> Generator[Connection, None, None]:
        """
        Check out a read-only connection for one query.

        Driver failures raised inside the block become StorageError, or
        QueryCancelledError when the guard interrupted the statement.

        Args:
            timeout: Seconds before the running statement is interrupted
            cancel_event: Interrupts the statement once set

        Yields:
            SQLAlchemy Connection

        Raises:
            StorageUnavailableError: Store closed or connection refused
            QueryCancelledError: Timeout elapsed or cancellation requested
            StorageError: Any other query failure
        """
        guard = QueryGuard(timeout, cancel_event)
        if guard.should_abort():
            raise QueryCancelledError("Catalog query cancelled before it started")

        engine = self._ensure_engine()
        if self._closed:
            raise StorageUnavailableError("Catalog store has been closed")

        try:
            conn = engine.connect()
        except SQLAlchemyError as e:
            logger.error(f"Could not check out catalog connection: {e}")
            raise StorageUnavailableError(
                f"Could not connect to catalog database: {_driver_message(e)}"
            ) from e

        with conn:
            raw = conn.connection.driver_connection
            if guard.active:
                raw.set_progress_handler(guard, PROGRESS_HANDLER_STEPS)
            try:
                yield conn
            except SQLAlchemyError as e:
                if guard.tripped:
                    raise QueryCancelledError("Catalog query cancelled") from e
                logger.error(f"Catalog query failed: {e}")
                raise StorageError(f"Catalog query failed: {_driver_message(e)}") from e
            finally:
                if guard.active:
                    raw.set_progress_handler(None, 0)

    def close(self) -> None:
        """
        Dispose of the engine and its pooled connections.

        Safe to call more than once; only the first call releases anything.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            engine, self._engine = self._engine, None

        if engine is not None:
            engine.dispose()
            logger.info(f"Catalog engine disposed: {self._path}")

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"CatalogDatabase(path={str(self._path)!r}, open={self.is_open})"


def _driver_message(error: SQLAlchemyError) -> str:
    """Short driver-level message without SQLAlchemy's SQL echo."""
    orig = getattr(error, "orig", None)
    return str(orig) if orig is not None else str(error)
