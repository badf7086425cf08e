"""
Application Exception Handling

Two families of errors live here:

- CatalogError and its subclasses, raised by the catalog store. They are
  split into configuration errors (fatal, raised while constructing the
  store) and access errors (raised by an individual lookup or version read).
- AppException, the HTTP-facing error with FastAPI integration.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


# ============================================
# CATALOG ERRORS
# ============================================

class CatalogError(Exception):
    """
    Base class for all catalog store errors.

    Attributes:
        message: Human-readable error message
        code: Machine-readable error code
    """

    code = "CATALOG_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class CatalogConfigurationError(CatalogError):
    """The store cannot be constructed. Startup must stop."""

    code = "CATALOG_CONFIGURATION_ERROR"


class InvalidPathError(CatalogConfigurationError):
    """Dataset path is missing or empty."""

    code = "INVALID_PATH"


class CatalogNotFoundError(CatalogConfigurationError):
    """Dataset file does not exist."""

    code = "CATALOG_NOT_FOUND"

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Catalog database not found at: {path}")


class CatalogAccessError(CatalogError):
    """A single lookup or version read failed. The store stays usable."""

    code = "CATALOG_ACCESS_ERROR"


class StorageUnavailableError(CatalogAccessError):
    """Connection could not be established, or the store was closed."""

    code = "STORAGE_UNAVAILABLE"


class StorageError(CatalogAccessError):
    """A query failed after the connection existed (I/O, corruption)."""

    code = "STORAGE_ERROR"


class QueryCancelledError(StorageError):
    """The query was aborted by a timeout or cancellation signal."""

    code = "QUERY_CANCELLED"


# ============================================
# HTTP ERRORS
# ============================================

class AppException(Exception):
    """
    Unified application exception for HTTP error scenarios.

    Provides consistent error response format across the API.

    Usage:
        raise AppException("Catalog store not loaded", "STORE_NOT_LOADED", 503)

    Error Codes:
        - STORE_NOT_LOADED (503)
    """

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "STORE_NOT_LOADED")
            status_code: HTTP status code (default: 400)
            details: Additional error context (optional)
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        error_dict = {
            "success": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "timestamp": self.timestamp
            }
        }

        if self.details:
            error_dict["error"]["details"] = self.details

        return error_dict


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    FastAPI exception handler for AppException.

    Converts AppException to consistent JSON error response.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def store_not_loaded() -> AppException:
    """Create catalog store not loaded exception."""
    return AppException(
        "Catalog store not loaded",
        "STORE_NOT_LOADED",
        503
    )
