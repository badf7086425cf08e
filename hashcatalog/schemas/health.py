"""
==============================================================================
Version & Health Schemas Module
==============================================================================

Response schemas for catalog version and service health.

Health Status Values:
--------------------
- OK:        catalog readable and carries a version record
- DEGRADED:  catalog readable but its VERSION table is empty
- ERROR:     catalog could not be read

==============================================================================
"""

import enum
from typing import Optional

from pydantic import BaseModel

from hashcatalog.catalog.models import CatalogVersion


class HealthStatus(str, enum.Enum):
    """Overall service health."""

    OK = "OK"
    DEGRADED = "DEGRADED"
    ERROR = "ERROR"

    def __str__(self) -> str:
        """Return the enum value as string."""
        return self.value


class VersionInfo(BaseModel):
    """Catalog version record as returned to clients."""
    version: str = ""
    build_set: str = ""
    build_date: str = ""
    release_date: str = ""
    description: str = ""

    @classmethod
    def from_catalog_version(cls, version: CatalogVersion) -> "VersionInfo":
        return cls(**version.model_dump())


class VersionResponse(BaseModel):
    """Catalog version, or the reason it is unavailable."""
    version_info: Optional[VersionInfo] = None
    error_message: str = ""


class HealthResponse(BaseModel):
    """Service health including the loaded catalog's version."""
    healthy: bool
    status: HealthStatus
    version: str
    database_path: str = "Unknown"
    version_info: Optional[VersionInfo] = None
    error_message: str = ""
