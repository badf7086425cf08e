"""
==============================================================================
Catalog Models Module
==============================================================================

Pydantic models for catalog lookup results.

==============================================================================
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CatalogEntry(BaseModel):
    """
    One (hash, package) association from the reference catalog.

    A hash shipped in several packages yields several entries. Descriptive
    fields are never None: a missing value is an empty string.

    Attributes:
        sha256: Normalized (uppercase) content hash
        package_id: Identifier of the originating package
        package_name: Package display name
        application_type: Package application type
        os_name: Operating system name
        manufacturer_name: Manufacturer name
        package_version: Package version
        package_language: Package language
        os_version: Operating system version
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    sha256: str = Field(..., min_length=1, description="Normalized content hash")
    package_id: int = Field(..., description="Originating package identifier")
    package_name: str = Field(default="", description="Package name")
    application_type: str = Field(default="", description="Application type")
    os_name: str = Field(default="", description="Operating system name")
    manufacturer_name: str = Field(default="", description="Manufacturer name")
    package_version: str = Field(default="", description="Package version")
    package_language: str = Field(default="", description="Package language")
    os_version: str = Field(default="", description="Operating system version")

    @field_validator(
        "package_name",
        "application_type",
        "os_name",
        "manufacturer_name",
        "package_version",
        "package_language",
        "os_version",
        mode="before",
    )
    @classmethod
    def none_as_empty(cls, value: Optional[str]) -> str:
        return "" if value is None else value

    @property
    def sort_key(self) -> tuple:
        """Ordering tuple used by lookups, after the hash itself."""
        return (
            self.package_id,
            self.package_name,
            self.os_name,
            self.manufacturer_name,
            self.application_type,
        )


class LookupResult(BaseModel):
    """
    Outcome of a batch hash lookup.

    Attributes:
        found: Matching entries ordered by hash, then sort_key
        not_found: Normalized input hashes without a match, deduplicated
    """

    found: List[CatalogEntry] = Field(default_factory=list)
    not_found: List[str] = Field(default_factory=list)

    @property
    def found_hashes(self) -> set:
        """Distinct hashes present in found."""
        return {entry.sha256 for entry in self.found}


class CatalogVersion(BaseModel):
    """
    Version record describing the loaded reference dataset.

    Dates are kept as the opaque strings stored in the database.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    version: str = ""
    build_set: str = ""
    build_date: str = ""
    release_date: str = ""
    description: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def none_as_empty(cls, value: Optional[object]) -> str:
        return "" if value is None else str(value)
