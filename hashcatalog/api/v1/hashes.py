"""
==============================================================================
Hash Lookup Endpoints
==============================================================================

Batch hash lookup and catalog version endpoints.

Both endpoints always answer 200; failures are reported in the
response's error_message field.

==============================================================================
"""

from fastapi import APIRouter, Depends

from hashcatalog.core.dependencies import get_lookup_service
from hashcatalog.schemas.hashes import HashCheckRequest, HashCheckResponse
from hashcatalog.schemas.health import VersionResponse
from hashcatalog.services.lookup_service import LookupService


router = APIRouter(tags=["Hashes"])


@router.post("/hashes/check", response_model=HashCheckResponse)
def check_hashes(
    request: HashCheckRequest,
    service: LookupService = Depends(get_lookup_service)
):
    """Look up a batch of SHA-256 hashes in the reference catalog."""
    return service.check_hashes(request.sha256_hashes)


@router.get("/version", response_model=VersionResponse)
def get_version(service: LookupService = Depends(get_lookup_service)):
    """Get the reference catalog's version record."""
    return service.version()
