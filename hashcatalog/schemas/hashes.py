"""
==============================================================================
Hash Check Schemas Module
==============================================================================

Request and response schemas for batch hash lookups.

A lookup never fails at the transport level: store errors are reported
in error_message of an otherwise empty response.

==============================================================================
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from hashcatalog.catalog.models import CatalogEntry


class HashCheckRequest(BaseModel):
    """Batch of hashes to look up. Blank and null entries are ignored."""
    sha256_hashes: List[Optional[str]] = Field(default_factory=list)


class FileInfo(BaseModel):
    """One catalog entry as returned to clients."""
    sha256: str
    package_id: int
    package_name: str = ""
    package_version: str = ""
    package_language: str = ""
    application_type: str = ""
    os_name: str = ""
    os_version: str = ""
    manufacturer_name: str = ""

    @classmethod
    def from_entry(cls, entry: CatalogEntry) -> "FileInfo":
        """Create response item from a CatalogEntry."""
        return cls(
            sha256=entry.sha256,
            package_id=entry.package_id,
            package_name=entry.package_name,
            package_version=entry.package_version,
            package_language=entry.package_language,
            application_type=entry.application_type,
            os_name=entry.os_name,
            os_version=entry.os_version,
            manufacturer_name=entry.manufacturer_name,
        )


class HashCheckResponse(BaseModel):
    """Result of a batch lookup."""
    found_files: List[FileInfo] = Field(default_factory=list)
    not_found_hashes: List[str] = Field(default_factory=list)
    error_message: str = ""
