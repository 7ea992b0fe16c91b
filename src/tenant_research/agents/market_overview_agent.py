"""Market Overview Agent - economic outlook, vacancy, lease and cap rates (OpenAI)."""

import logging

from tenant_research.agents.base import AgentResult, BaseAgent
from tenant_research.agents.prompts.market_overview import MARKET_OVERVIEW_TEMPLATE
from tenant_research.domain.enums import AIProvider
from tenant_research.infra.ai_gateway import AIGateway

logger = logging.getLogger(__name__)

OUTLOOK_STATUSES = ("Boom", "Growing", "Slowing", "Stagnant")


def default_market_overview() -> dict:
    return {
        "region": None,
        "year": None,
        "economic_outlook": {"status": "Unknown", "description": "No data available"},
        "vacancy_rate": None,
        "absorption_rate": None,
        "lease_rates": None,
        "cap_rates": None,
        "tax_incentives": [],
        "market_summary": "No data available",
        "error": True,
    }


class MarketOverviewAgent(BaseAgent):
    def __init__(self, gateway: AIGateway):
        super().__init__(
            agent_name="market_overview",
            gateway=gateway,
            provider=AIProvider.OPENAI,
            temperature=0.3,
            max_tokens=2000,
        )

    async def estimate(
        self,
        address: str,
        property_type: str = "",
        building_size: str = "",
    ) -> AgentResult:
        """Always succeeds; without an ``economic_outlook`` the default overview is returned.

        An outlook status outside Boom/Growing/Slowing/Stagnant is reported
        as ``Unknown``.
        """
        prompt = MARKET_OVERVIEW_TEMPLATE.format(
            address=address,
            property_type=property_type or "Not specified",
            building_size=building_size or "Not specified",
        )

        result = await self.generate_json(prompt)
        outlook = result.data.get("economic_outlook") if result.ok else None
        if not isinstance(outlook, dict):
            logger.warning(
                "[%s] Market overview failed for %s, using default: %s",
                self.agent_name,
                address,
                result.error or "missing economic_outlook",
            )
            return AgentResult.success(data=default_market_overview(), latency_ms=result.latency_ms)

        overview = dict(result.data)
        if outlook.get("status") not in OUTLOOK_STATUSES:
            overview["economic_outlook"] = {**outlook, "status": "Unknown"}

        logger.info(
            "[%s] Market overview for %s: outlook=%s",
            self.agent_name,
            address,
            overview["economic_outlook"]["status"],
        )
        return AgentResult.success(data=overview, latency_ms=result.latency_ms)
