"""Building Configuration Agent - Gemini read of the property's physical layout."""

import logging

from tenant_research.agents.base import AgentResult, BaseAgent
from tenant_research.agents.prompts.building_config import BUILDING_CONFIG_TEMPLATE
from tenant_research.domain.enums import AIProvider
from tenant_research.domain.schemas import PropertyData
from tenant_research.infra.ai_gateway import AIGateway

logger = logging.getLogger(__name__)


class BuildingConfigAgent(BaseAgent):
    """Describes dock count, parking, clear height and target use types."""

    def __init__(self, gateway: AIGateway):
        super().__init__(
            agent_name="building_config",
            gateway=gateway,
            provider=AIProvider.GEMINI,
            temperature=0.3,
            max_tokens=4500,
        )

    async def analyze(self, property_data: PropertyData) -> AgentResult:
        """Analyze the building configuration.

        Returns:
            AgentResult with the parsed configuration dict in ``data``.
        """
        prompt = BUILDING_CONFIG_TEMPLATE.format(
            address=property_data.address,
            property_type=property_data.type,
            square_footage=property_data.square_footage,
            acreage=property_data.acreage or "N/A",
            features=", ".join(property_data.features) or "Standard industrial features",
            total_area=property_data.square_footage or 0,
            land_area=property_data.acreage or 0,
        )

        result = await self.generate_json(prompt)
        if result.ok:
            logger.info(
                "[%s] Configuration for %s: %s",
                self.agent_name,
                property_data.address,
                result.data.get("configuration"),
            )
        return result
