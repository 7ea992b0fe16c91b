"""Building Rate Agent - Gemini estimate of the annual lease rate per sq ft."""

import logging

from tenant_research.agents.base import AgentResult, BaseAgent
from tenant_research.agents.prompts.building_rate import BUILDING_RATE_TEMPLATE
from tenant_research.domain.enums import AIProvider
from tenant_research.infra.ai_gateway import AIGateway

logger = logging.getLogger(__name__)

VALID_CONFIDENCE = ("high", "medium", "low")


def default_estimate() -> dict:
    """Estimate returned when the model cannot produce a usable one."""
    return {"estimated_rate": 7.0, "confidence": "low", "error": True}


class BuildingRateAgent(BaseAgent):
    """Estimates USD/sq ft/year lease rates for industrial buildings."""

    def __init__(self, gateway: AIGateway):
        super().__init__(
            agent_name="building_rate",
            gateway=gateway,
            provider=AIProvider.GEMINI,
            temperature=0.3,
            max_tokens=2000,
        )

    async def estimate(
        self,
        address: str,
        property_type: str = "",
        building_size: str = "",
    ) -> AgentResult:
        """Estimate the building rate for an address.

        Always succeeds: a failed or malformed model response yields
        ``default_estimate()`` in ``data``.
        """
        prompt = BUILDING_RATE_TEMPLATE.format(
            address=address,
            property_type=property_type or "Not specified",
            building_size=building_size or "Not specified",
        )

        result = await self.generate_json(prompt)
        if not result.ok:
            logger.warning(
                "[%s] Estimation failed for %s, using default: %s",
                self.agent_name,
                address,
                result.error,
            )
            return AgentResult.success(data=default_estimate(), latency_ms=result.latency_ms)

        try:
            rate = float(result.data.get("estimated_rate"))
        except (TypeError, ValueError):
            rate = 0.0
        confidence = result.data.get("confidence")
        if rate <= 0 or confidence not in VALID_CONFIDENCE:
            logger.warning(
                "[%s] Invalid rate estimation format for %s: %s",
                self.agent_name,
                address,
                result.data,
            )
            return AgentResult.success(data=default_estimate(), latency_ms=result.latency_ms)

        logger.info(
            "[%s] Estimated %.2f $/sqft/yr (%s confidence) for %s",
            self.agent_name,
            rate,
            confidence,
            address,
        )
        return AgentResult.success(
            data={"estimated_rate": rate, "confidence": confidence},
            latency_ms=result.latency_ms,
        )
