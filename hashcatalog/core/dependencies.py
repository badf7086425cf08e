"""
==============================================================================
FastAPI Dependencies Module
==============================================================================

Dependency injection for route handlers.

Dependency Hierarchy:
--------------------
                    ┌─────────────────┐
                    │ get_catalog_store│
                    └────────┬────────┘
                             │
                    ┌────────▼────────┐
                    │get_lookup_service│
                    └─────────────────┘

Tests replace either dependency through app.dependency_overrides.

==============================================================================
"""

from __future__ import annotations

from fastapi import Depends

from hashcatalog.catalog.store import CatalogStore, get_store
from hashcatalog.config import get_settings
from hashcatalog.core import exceptions
from hashcatalog.services.lookup_service import LookupService


def get_catalog_store() -> CatalogStore:
    """
    Get the process-wide catalog store.

    Raises:
        AppException: STORE_NOT_LOADED if the store was never initialized
    """
    store = get_store()
    if store is None:
        raise exceptions.store_not_loaded()
    return store


def get_lookup_service(
    store: CatalogStore = Depends(get_catalog_store)
) -> LookupService:
    """Build a LookupService around the current store."""
    settings = get_settings()
    return LookupService(
        store,
        service_version=settings.app_version,
        query_timeout=settings.query_timeout,
    )
