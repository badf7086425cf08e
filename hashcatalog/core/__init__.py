"""
==============================================================================
Core Package
==============================================================================

Core utilities and infrastructure for the application.

Modules:
--------
- exceptions: Catalog error taxonomy, AppException and handlers
- dependencies: FastAPI dependency injection functions

Usage:
------
    from hashcatalog.core import StorageError, AppException

    # Or use exception factory functions via module
    from hashcatalog.core import exceptions
    raise exceptions.store_not_loaded()

==============================================================================
"""

from .exceptions import (
    AppException,
    CatalogAccessError,
    CatalogConfigurationError,
    CatalogError,
    CatalogNotFoundError,
    InvalidPathError,
    QueryCancelledError,
    StorageError,
    StorageUnavailableError,
    register_exception_handlers,
)

__all__ = [
    # Catalog errors
    "CatalogError",
    "CatalogConfigurationError",
    "InvalidPathError",
    "CatalogNotFoundError",
    "CatalogAccessError",
    "StorageUnavailableError",
    "StorageError",
    "QueryCancelledError",
    # HTTP errors
    "AppException",
    "register_exception_handlers",
]
