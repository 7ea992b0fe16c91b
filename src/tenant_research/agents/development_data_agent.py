"""Development Data Agent - nearby developments and relocating companies (Claude)."""

import logging

from tenant_research.agents.base import AgentResult, BaseAgent
from tenant_research.agents.prompts.development_data import DEVELOPMENT_DATA_TEMPLATE
from tenant_research.domain.enums import AIProvider
from tenant_research.infra.ai_gateway import AIGateway

logger = logging.getLogger(__name__)


def default_development_data() -> dict:
    return {
        "growth_status": "Unknown",
        "growth_summary": "No data available",
        "developments_count": 0,
        "offshoring_count": 0,
        "error": True,
    }


class DevelopmentDataAgent(BaseAgent):
    def __init__(self, gateway: AIGateway):
        super().__init__(
            agent_name="development_data",
            gateway=gateway,
            provider=AIProvider.CLAUDE,
            temperature=0.3,
            max_tokens=2000,
        )

    async def analyze(
        self,
        address: str,
        property_type: str = "",
        building_size: str = "",
    ) -> AgentResult:
        """Developments within 30 miles of the address.

        Always succeeds; an answer without ``developments`` and
        ``offshoring_activity`` lists yields ``default_development_data()``.
        """
        prompt = DEVELOPMENT_DATA_TEMPLATE.format(
            address=address,
            property_type=property_type or "Not specified",
            building_size=building_size or "Not specified",
        )

        result = await self.generate_json(prompt)
        if not result.ok:
            logger.warning(
                "[%s] Development analysis failed for %s, using default: %s",
                self.agent_name,
                address,
                result.error,
            )
            return AgentResult.success(data=default_development_data(), latency_ms=result.latency_ms)

        developments = result.data.get("developments")
        offshoring = result.data.get("offshoring_activity")
        if not isinstance(developments, list) or not isinstance(offshoring, list):
            logger.warning("[%s] Invalid development data format for %s", self.agent_name, address)
            return AgentResult.success(data=default_development_data(), latency_ms=result.latency_ms)

        logger.info(
            "[%s] %s: growth=%s, %d developments, %d relocations",
            self.agent_name,
            address,
            result.data.get("growth_status"),
            len(developments),
            len(offshoring),
        )
        return result
