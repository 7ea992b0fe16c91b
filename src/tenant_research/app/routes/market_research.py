"""Single-call market research routes: cap rates, overview, developments, recommendation."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from tenant_research.agents.development_data_agent import DevelopmentDataAgent
from tenant_research.agents.investment_recommendation_agent import InvestmentRecommendationAgent
from tenant_research.agents.market_data_agent import MarketDataAgent
from tenant_research.agents.market_overview_agent import MarketOverviewAgent
from tenant_research.app.routes.building_rate import require_address
from tenant_research.domain.schemas import (
    InvestmentRecommendationRequest,
    PropertyEstimateRequest,
)
from tenant_research.infra.ai_gateway import AIGateway, get_ai_gateway

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["market-research"])


def _envelope(data: dict) -> dict:
    return {
        "success": True,
        "data": data,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/market-data/{address}")
async def get_market_data(
    address: str,
    gateway: AIGateway = Depends(get_ai_gateway),
):
    """Cap-rate market data; the placeholder analysis is served when the model fails."""
    logger.info("Market data request for %s", address)
    result = await MarketDataAgent(gateway).estimate(address)
    return _envelope(result.data)


@router.post("/market-overview")
async def get_market_overview(
    body: PropertyEstimateRequest,
    gateway: AIGateway = Depends(get_ai_gateway),
):
    require_address(body)
    logger.info("Market overview request for %s", body.property_address)
    result = await MarketOverviewAgent(gateway).estimate(
        body.property_address, body.property_type, body.building_size
    )
    return _envelope(result.data)


@router.post("/development-data")
async def get_development_data(
    body: PropertyEstimateRequest,
    gateway: AIGateway = Depends(get_ai_gateway),
):
    require_address(body)
    logger.info("Development data request for %s", body.property_address)
    result = await DevelopmentDataAgent(gateway).analyze(
        body.property_address, body.property_type, body.building_size
    )
    return _envelope(result.data)


@router.post("/investment-recommendation")
async def get_investment_recommendation(
    body: InvestmentRecommendationRequest,
    gateway: AIGateway = Depends(get_ai_gateway),
):
    require_address(body)
    logger.info("Investment recommendation request for %s", body.property_address)
    result = await InvestmentRecommendationAgent(gateway).recommend(
        body.property_address, body.property_type, body.building_size, body.asking_price
    )
    return _envelope(result.data)
