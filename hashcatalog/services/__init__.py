"""
==============================================================================
Services Package - Business Logic Layer
==============================================================================

Service classes sitting between the API routers and the catalog store.

    ┌─────────────────┐
    │   API Router    │
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │  LookupService  │  ← Response mapping, error capture
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │  CatalogStore   │  ← Normalization, query, reconciliation
    └─────────────────┘

==============================================================================
"""

from .lookup_service import LookupService, format_timestamp

__all__ = [
    "LookupService",
    "format_timestamp",
]
