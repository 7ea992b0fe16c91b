"""Investment Recommendation Agent - strengths, risks, timing and strategy (Claude)."""

import logging

from tenant_research.agents.base import AgentResult, BaseAgent
from tenant_research.agents.prompts.investment_recommendation import (
    INVESTMENT_RECOMMENDATION_TEMPLATE,
)
from tenant_research.domain.enums import AIProvider
from tenant_research.infra.ai_gateway import AIGateway

logger = logging.getLogger(__name__)

REQUIRED_SECTIONS = ("property_analysis", "market_analysis", "investment_summary")


def default_recommendation() -> dict:
    return {
        "property_analysis": {"strengths": [], "risks": []},
        "market_analysis": {"strengths": [], "risks": []},
        "investment_summary": {
            "key_strengths": [],
            "risks_to_monitor": [],
            "timing": "Unknown",
            "strategy": "Unknown",
            "summary": "No data available",
        },
        "error": True,
    }


class InvestmentRecommendationAgent(BaseAgent):
    """Buy-side recommendation for a property, parsed from a ``<json>`` block."""

    def __init__(self, gateway: AIGateway):
        super().__init__(
            agent_name="investment_recommendation",
            gateway=gateway,
            provider=AIProvider.CLAUDE,
            temperature=0.3,
            max_tokens=10000,
        )

    async def recommend(
        self,
        address: str,
        property_type: str = "",
        building_size: str = "",
        asking_price: str = "",
    ) -> AgentResult:
        prompt = INVESTMENT_RECOMMENDATION_TEMPLATE.format(
            address=address,
            property_type=property_type or "Not specified",
            building_size=building_size or "Not specified",
            asking_price=asking_price or "Not specified",
        )

        result = await self.generate_json(prompt)
        if not result.ok:
            logger.warning(
                "[%s] Recommendation failed for %s, using default: %s",
                self.agent_name,
                address,
                result.error,
            )
            return AgentResult.success(data=default_recommendation(), latency_ms=result.latency_ms)

        missing = [s for s in REQUIRED_SECTIONS if not isinstance(result.data.get(s), dict)]
        if missing:
            logger.warning(
                "[%s] Recommendation for %s missing sections %s",
                self.agent_name,
                address,
                missing,
            )
            return AgentResult.success(data=default_recommendation(), latency_ms=result.latency_ms)

        summary = result.data["investment_summary"]
        logger.info(
            "[%s] Recommendation for %s: %d key strengths, %d risks to monitor",
            self.agent_name,
            address,
            len(summary.get("key_strengths") or []),
            len(summary.get("risks_to_monitor") or []),
        )
        return result
