"""
==============================================================================
Database Package
==============================================================================

SQLAlchemy infrastructure for the read-only reference catalog.

Architecture:
------------
├── database.py   - CatalogDatabase: lazy read-only engine, cancellation
└── schema.py     - Core table definitions (FILE, PKG, OS, MFG, VERSION)

==============================================================================
"""

from .database import CatalogDatabase, QueryGuard
from .schema import (
    file_table,
    manufacturer_table,
    metadata,
    os_table,
    package_table,
    version_table,
)

__all__ = [
    "CatalogDatabase",
    "QueryGuard",
    "metadata",
    "file_table",
    "package_table",
    "os_table",
    "manufacturer_table",
    "version_table",
]
