"""
==============================================================================
Lookup Service Module
==============================================================================

Facade between the HTTP layer and the catalog store.

This module implements:
- LookupService: batch lookup, version and health operations
- Mapping of store results into response schemas
- Mapping of store errors into structured error fields

Error Contract:
--------------
None of the operations raise. A failed lookup returns an empty response
with error_message set, so one bad batch never becomes a transport fault.
Version and health report a missing VERSION row separately from a
catalog that cannot be read at all.

==============================================================================
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional

from hashcatalog.catalog.store import CatalogStore
from hashcatalog.core.exceptions import CatalogError
from hashcatalog.schemas.hashes import FileInfo, HashCheckResponse
from hashcatalog.schemas.health import (
    HealthResponse,
    HealthStatus,
    VersionInfo,
    VersionResponse,
)


# Module logger
logger = logging.getLogger(__name__)

NO_VERSION_MESSAGE = "No version information found in database"


def format_timestamp(value: str) -> str:
    """
    Render an ISO-like date string as 'YYYY-MM-DD HH:MM:SS'.

    Values that do not parse are returned unchanged.
    """
    try:
        return datetime.fromisoformat(value.strip()).strftime("%Y-%m-%d %H:%M:%S")
    except ValueError:
        return value


def describe_error(error: Exception) -> str:
    """Message placed in error_message fields."""
    if isinstance(error, CatalogError):
        return f"{error.code}: {error.message}"
    return str(error) or error.__class__.__name__


class LookupService:
    """
    Service translating client requests into catalog store calls.

    Attributes:
        _store: CatalogStore the service reads from
        _service_version: Version string reported by health checks
        _query_timeout: Per-query timeout passed to the store

    Example:
        >>> service = LookupService(store, service_version="1.0.0")
        >>> response = service.check_hashes(["0008B261...", ""])
        >>> response.error_message
        ''
    """

    def __init__(
        self,
        store: CatalogStore,
        service_version: str = "1.0.0",
        query_timeout: Optional[float] = None
    ) -> None:
        """
        Initialize the lookup service.

        Args:
            store: CatalogStore to query
            service_version: Version reported by health()
            query_timeout: Seconds before store queries are interrupted
        """
        self._store = store
        self._service_version = service_version
        self._query_timeout = query_timeout

    # =========================================================================
    # LOOKUP OPERATIONS
    # =========================================================================

    def check_hashes(self, hashes: Optional[Iterable[Optional[str]]]) -> HashCheckResponse:
        """
        Look up a batch of hashes.

        Args:
            hashes: Raw hashes from the client

        Returns:
            HashCheckResponse; on failure empty with error_message set
        """
        hashes = list(hashes or [])
        logger.debug(f"Checking {len(hashes)} hashes")

        try:
            result = self._store.check_hashes(hashes, timeout=self._query_timeout)
        except Exception as e:
            logger.exception("Error checking hashes")
            return HashCheckResponse(error_message=describe_error(e))

        logger.debug(
            f"CheckHashes result: {len(result.found)} found, "
            f"{len(result.not_found)} not found"
        )

        return HashCheckResponse(
            found_files=[FileInfo.from_entry(entry) for entry in result.found],
            not_found_hashes=result.not_found,
        )

    # =========================================================================
    # VERSION & HEALTH
    # =========================================================================

    def version(self) -> VersionResponse:
        """
        Get the catalog version record.

        Returns:
            VersionResponse; version_info is None when the record is
            missing or unreadable, with error_message telling which
        """
        try:
            catalog_version = self._store.get_version(timeout=self._query_timeout)
        except Exception as e:
            logger.exception("Error reading catalog version")
            return VersionResponse(error_message=describe_error(e))

        if catalog_version is None:
            logger.warning(NO_VERSION_MESSAGE)
            return VersionResponse(error_message=NO_VERSION_MESSAGE)

        return VersionResponse(
            version_info=VersionInfo.from_catalog_version(catalog_version)
        )

    def health(self) -> HealthResponse:
        """
        Get service health.

        Returns:
            HealthResponse with status OK, DEGRADED (no version record)
            or ERROR (catalog unreadable)
        """
        try:
            catalog_version = self._store.get_version(timeout=self._query_timeout)
        except Exception as e:
            logger.exception("Health check failed")
            return HealthResponse(
                healthy=False,
                status=HealthStatus.ERROR,
                version=self._service_version,
                database_path=self._store.database_path,
                error_message=describe_error(e),
            )

        if catalog_version is None:
            return HealthResponse(
                healthy=False,
                status=HealthStatus.DEGRADED,
                version=self._service_version,
                database_path=self._store.database_path,
                error_message=NO_VERSION_MESSAGE,
            )

        return HealthResponse(
            healthy=True,
            status=HealthStatus.OK,
            version=self._service_version,
            database_path=self._store.database_path,
            version_info=VersionInfo(
                version=catalog_version.version,
                build_set=catalog_version.build_set,
                build_date=format_timestamp(catalog_version.build_date),
                release_date=format_timestamp(catalog_version.release_date),
                description=catalog_version.description,
            ),
        )
