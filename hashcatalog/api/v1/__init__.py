"""
==============================================================================
API v1 Endpoints
==============================================================================

Version 1 of the REST API.

Routers:
--------
- health: Health check endpoints
- hashes: Batch hash lookup and catalog version

==============================================================================
"""

from . import hashes, health

__all__ = ["hashes", "health"]
