"""
==============================================================================
Catalog Package - Hash Lookup Engine
==============================================================================

Batch hash lookup and reconciliation against the reference catalog.

Classes:
--------
- CatalogEntry: One (hash, package) association
- LookupResult: Found entries plus unmatched hashes
- CatalogVersion: Dataset version record
- CatalogStore: Lookup engine owning the read-only connection

==============================================================================
"""

from .models import CatalogEntry, CatalogVersion, LookupResult
from .store import CatalogStore, close_store, get_store, init_store

__all__ = [
    "CatalogEntry",
    "CatalogVersion",
    "LookupResult",
    "CatalogStore",
    "get_store",
    "init_store",
    "close_store",
]
