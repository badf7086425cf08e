"""
==============================================================================
Catalog Store Module
==============================================================================

Batch hash lookup against the read-only reference catalog.

Features:
---------
- Input normalization (trim, drop blanks, uppercase, dedupe)
- One query per batch regardless of its size
- Deterministic ordering of matching rows
- Reconciliation of found vs not-found hashes
- Version record access (re-read on every call)

Lookup Query:
------------
The normalized batch is bound as a single JSON array and expanded with
SQLite's json_each(), so the batch size is not limited by SQLite's
host-parameter cap:

    SELECT f.sha256, f.package_id, p.name, p.application_type, os.name, mfg.name
    FROM FILE f
    JOIN PKG p ON f.package_id = p.package_id
    LEFT JOIN OS os ON p.operating_system_id = os.operating_system_id
    LEFT JOIN MFG mfg ON p.manufacturer_id = mfg.manufacturer_id
    WHERE f.sha256 IN (SELECT value FROM json_each(:hashes))
    ORDER BY f.sha256, f.package_id, p.name, os.name, mfg.name, p.application_type

NULL descriptive columns are coalesced to '' both in the output and in
the ORDER BY, and compare byte-wise (SQLite BINARY collation).

==============================================================================
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Iterable, List, Optional, Union

from sqlalchemy import func, select
from sqlalchemy.sql import Select

from hashcatalog.catalog.models import CatalogEntry, CatalogVersion, LookupResult
from hashcatalog.db.database import CatalogDatabase
from hashcatalog.db.schema import (
    file_table,
    manufacturer_table,
    os_table,
    package_table,
    version_table,
)


# Module logger
logger = logging.getLogger(__name__)


def _text(column):
    return func.coalesce(column, "")


def build_lookup_statement(hashes: List[str]) -> Select:
    """
    Build the batch lookup query for already normalized hashes.

    Args:
        hashes: Normalized, deduplicated hashes

    Returns:
        SQLAlchemy Select producing CatalogEntry-shaped rows
    """
    f, p, o, m = file_table, package_table, os_table, manufacturer_table
    requested = func.json_each(json.dumps(hashes)).table_valued("value")

    package_name = _text(p.c.name).label("package_name")
    application_type = _text(p.c.application_type).label("application_type")
    os_name = _text(o.c.name).label("os_name")
    manufacturer_name = _text(m.c.name).label("manufacturer_name")

    joined = (
        f.join(p, f.c.package_id == p.c.package_id)
        .outerjoin(o, p.c.operating_system_id == o.c.operating_system_id)
        .outerjoin(m, p.c.manufacturer_id == m.c.manufacturer_id)
    )

    return (
        select(
            f.c.sha256.label("sha256"),
            f.c.package_id.label("package_id"),
            package_name,
            application_type,
            os_name,
            manufacturer_name,
            _text(p.c.version).label("package_version"),
            _text(p.c.language).label("package_language"),
            _text(o.c.version).label("os_version"),
        )
        .select_from(joined)
        .where(f.c.sha256.in_(select(requested.c.value)))
        .order_by(
            f.c.sha256,
            f.c.package_id,
            package_name,
            os_name,
            manufacturer_name,
            application_type,
        )
    )


def build_version_statement() -> Select:
    """Build the query reading the first VERSION row."""
    v = version_table
    return select(
        v.c.version,
        v.c.build_set,
        v.c.build_date,
        v.c.release_date,
        v.c.description,
    ).limit(1)


class CatalogStore:
    """
    Hash lookup engine over a read-only reference catalog.

    The dataset path is validated on construction; the underlying engine
    is opened lazily on first use and shared by all callers. Every
    operation is safe to call concurrently from several threads.

    Attributes:
        database_path: Validated dataset path
        is_open: True once the storage engine has been opened
        is_closed: True after close()

    Example:
        >>> store = CatalogStore("rds/minimal.db")
        >>> result = store.check_hashes(["0008b261...", "0000..."])
        >>> [entry.package_id for entry in result.found]
        [1234, 5678]
        >>> result.not_found
        ['0000...']
        >>> store.close()
    """

    def __init__(
        self,
        database_path: Union[str, Path, None],
        *,
        query_timeout: Optional[float] = None,
        pool_size: int = 5,
        max_overflow: int = 10,
        pool_timeout: float = 30.0,
    ) -> None:
        """
        Create a store for the catalog at database_path.

        Args:
            database_path: Path to the SQLite catalog file
            query_timeout: Default per-query timeout in seconds
            pool_size: Read-only connections kept in the pool
            max_overflow: Extra connections allowed under load
            pool_timeout: Seconds to wait for a free connection

        Raises:
            InvalidPathError: If database_path is None or blank
            CatalogNotFoundError: If the file does not exist
        """
        self._database = CatalogDatabase(
            database_path,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=pool_timeout,
        )
        self._query_timeout = query_timeout

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def database_path(self) -> str:
        """Get the dataset path this store reads."""
        return str(self._database.path)

    @property
    def is_open(self) -> bool:
        return self._database.is_open

    @property
    def is_closed(self) -> bool:
        return self._database.is_closed

    # =========================================================================
    # NORMALIZATION (Static Methods)
    # =========================================================================

    @staticmethod
    def normalize_hashes(hashes: Optional[Iterable[Optional[str]]]) -> List[str]:
        """
        Normalize a raw batch of hashes.

        Drops None, non-string, empty and whitespace-only entries, trims
        and uppercases the rest, and removes duplicates keeping the first
        occurrence.

        Args:
            hashes: Raw input batch (may be None)

        Returns:
            Normalized hashes in first-occurrence order

        Example:
            >>> CatalogStore.normalize_hashes([" ab12 ", None, "", "AB12", "cd"])
            ['AB12', 'CD']
        """
        if hashes is None:
            return []

        normalized = {}
        for raw in hashes:
            if not isinstance(raw, str):
                continue
            value = raw.strip()
            if value:
                normalized.setdefault(value.upper(), None)

        return list(normalized)

    # =========================================================================
    # LOOKUP METHODS
    # =========================================================================

    def check_hashes(
        self,
        hashes: Optional[Iterable[Optional[str]]],
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> LookupResult:
        """
        Look up a batch of hashes in one round trip.

        Args:
            hashes: Raw hashes; blanks and None are ignored
            timeout: Seconds before the query is interrupted (defaults to
                the store's query_timeout)
            cancel_event: Interrupts the query once set

        Returns:
            LookupResult with ordered entries and the unmatched hashes

        Raises:
            StorageUnavailableError: Catalog could not be opened, or store closed
            QueryCancelledError: Query interrupted by timeout or cancel_event
            StorageError: Query failed
        """
        normalized = self.normalize_hashes(hashes)
        if not normalized:
            return LookupResult()

        statement = build_lookup_statement(normalized)
        with self._database.connect(self._timeout(timeout), cancel_event) as conn:
            rows = conn.execute(statement).mappings().all()

        found = [CatalogEntry.model_validate(dict(row)) for row in rows]
        found_hashes = {entry.sha256 for entry in found}
        not_found = [h for h in normalized if h not in found_hashes]

        logger.debug(
            f"Checked {len(normalized)} hashes: {len(found_hashes)} matched "
            f"({len(found)} entries), {len(not_found)} not found"
        )

        return LookupResult(found=found, not_found=not_found)

    def get_version(
        self,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> Optional[CatalogVersion]:
        """
        Read the catalog's version record.

        Returns:
            CatalogVersion, or None when the VERSION table is empty

        Raises:
            StorageUnavailableError: Catalog could not be opened, or store closed
            QueryCancelledError: Query interrupted by timeout or cancel_event
            StorageError: Read failed
        """
        with self._database.connect(self._timeout(timeout), cancel_event) as conn:
            row = conn.execute(build_version_statement()).mappings().first()

        if row is None:
            return None
        return CatalogVersion.model_validate(dict(row))

    def _timeout(self, timeout: Optional[float]) -> Optional[float]:
        return timeout if timeout is not None else self._query_timeout

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def close(self) -> None:
        """Release the storage engine. Later operations fail."""
        self._database.close()

    def __enter__(self) -> CatalogStore:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"CatalogStore(database_path={self.database_path!r}, open={self.is_open})"


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

_store_instance: Optional[CatalogStore] = None
_store_lock = threading.Lock()


def get_store() -> Optional[CatalogStore]:
    """Get the global store instance."""
    return _store_instance


def init_store(database_path: Union[str, Path, None], **options) -> CatalogStore:
    """
    Initialize the global store instance.

    A previously initialized store is closed first.

    Args:
        database_path: Path to the SQLite catalog file
        **options: Keyword options forwarded to CatalogStore

    Returns:
        CatalogStore instance

    Raises:
        InvalidPathError: If database_path is None or blank
        CatalogNotFoundError: If the file does not exist
    """
    global _store_instance
    store = CatalogStore(database_path, **options)

    with _store_lock:
        previous, _store_instance = _store_instance, store

    if previous is not None:
        previous.close()

    logger.info(f"Catalog store initialized: {store.database_path}")
    return store


def close_store() -> None:
    """Close and forget the global store instance."""
    global _store_instance
    with _store_lock:
        store, _store_instance = _store_instance, None

    if store is not None:
        store.close()
