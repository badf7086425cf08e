"""
==============================================================================
Schemas Package - Pydantic Models
==============================================================================

Request and response schemas using Pydantic for validation.

This package provides:
- Hashes: batch lookup request/response
- Health: version and health responses

==============================================================================
"""

from .hashes import FileInfo, HashCheckRequest, HashCheckResponse
from .health import HealthResponse, HealthStatus, VersionInfo, VersionResponse

__all__ = [
    # Hashes
    "HashCheckRequest",
    "HashCheckResponse",
    "FileInfo",
    # Health
    "HealthStatus",
    "VersionInfo",
    "VersionResponse",
    "HealthResponse",
]
