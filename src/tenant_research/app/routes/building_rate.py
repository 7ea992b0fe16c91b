"""Building and land lease-rate estimation routes."""

import asyncio
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException

from tenant_research.agents.building_rate_agent import BuildingRateAgent
from tenant_research.agents.land_rate_agent import LandRateAgent
from tenant_research.domain.enums import AIProvider
from tenant_research.domain.schemas import PropertyEstimateRequest
from tenant_research.infra.ai_gateway import AIGateway, get_ai_gateway

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/building-rate", tags=["building-rate"])


def require_address(body: PropertyEstimateRequest) -> None:
    if not body.property_address.strip():
        raise HTTPException(
            status_code=400,
            detail={"error": "Property address is required", "code": "MISSING_ADDRESS"},
        )


@router.post("/estimate")
async def estimate_building_rate(
    body: PropertyEstimateRequest,
    gateway: AIGateway = Depends(get_ai_gateway),
):
    """Estimate the annual lease rate per sq ft for a property."""
    require_address(body)

    logger.info("Building rate estimation request for %s", body.property_address)
    result = await BuildingRateAgent(gateway).estimate(
        body.property_address,
        body.property_type,
        body.building_size,
    )

    return {
        "success": True,
        "data": result.data,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.post("/estimate-land")
async def estimate_land_rate(
    body: PropertyEstimateRequest,
    gateway: AIGateway = Depends(get_ai_gateway),
):
    """IOS land rate per acre per month, estimated by Gemini and OpenAI side by side."""
    require_address(body)

    logger.info("Land rate estimation request for %s", body.property_address)
    args = (body.property_address, body.property_type, body.building_size)
    gemini_result, openai_result = await asyncio.gather(
        LandRateAgent(gateway, AIProvider.GEMINI).estimate(*args),
        LandRateAgent(gateway, AIProvider.OPENAI).estimate(*args),
    )

    return {
        "success": True,
        "data": gemini_result.data,
        "data_openai": openai_result.data,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
