"""Demographics API routes."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException

from tenant_research.domain.errors import PropertyValidationError, UpstreamError
from tenant_research.services.demographics_service import (
    DemographicsService,
    get_demographics_service,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/demographics", tags=["demographics"])


@router.get("/{address}")
async def get_demographics(
    address: str,
    service: DemographicsService = Depends(get_demographics_service),
):
    """State-level Census demographics for an address such as ``Dallas, TX 75201``."""
    try:
        demographics = await service.get_demographics_for_address(address)
    except PropertyValidationError as exc:
        raise HTTPException(status_code=400, detail={"success": False, "error": str(exc)})
    except UpstreamError as exc:
        logger.error("Demographics lookup failed for %s: %s", address, exc)
        raise HTTPException(
            status_code=502,
            detail={"success": False, "error": "Census data unavailable", "message": exc.message},
        )

    return {
        "success": True,
        "data": demographics,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
