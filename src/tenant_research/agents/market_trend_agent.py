"""Market Trend Agent - area growth and economic trend analysis."""

import logging

from tenant_research.agents.base import AgentResult, BaseAgent
from tenant_research.agents.prompts.market_trends import MARKET_TRENDS_TEMPLATE
from tenant_research.domain.enums import AIProvider
from tenant_research.infra.ai_gateway import AIGateway

logger = logging.getLogger(__name__)


class MarketTrendAgent(BaseAgent):
    """Scores area growth (1-10) and summarises demand indicators for an address."""

    def __init__(self, gateway: AIGateway):
        super().__init__(
            agent_name="market_trends",
            gateway=gateway,
            provider=AIProvider.OPENAI,
            temperature=0.3,
            max_tokens=1000,
        )

    async def analyze(self, address: str) -> AgentResult:
        logger.info("[%s] Analyzing area growth trends for %s", self.agent_name, address)

        result = await self.generate_json(MARKET_TRENDS_TEMPLATE.format(address=address))
        if result.ok:
            logger.info(
                "[%s] Growth score for %s: %s",
                self.agent_name,
                address,
                result.data.get("area_growth_score"),
            )
        return result
