"""Industrial employment API routes."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException

from tenant_research.domain.errors import PropertyValidationError
from tenant_research.services.industrial_data_service import (
    IndustrialDataService,
    get_industrial_data_service,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/industrial", tags=["industrial"])


@router.get("/{address}")
async def get_industrial_data(
    address: str,
    service: IndustrialDataService = Depends(get_industrial_data_service),
):
    try:
        data = await service.get_industrial_data_for_address(address)
    except PropertyValidationError as exc:
        raise HTTPException(status_code=400, detail={"success": False, "error": str(exc)})

    if data is None:
        raise HTTPException(
            status_code=404,
            detail={"success": False, "error": "No industrial data available for this location"},
        )

    return {
        "success": True,
        "data": data,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
