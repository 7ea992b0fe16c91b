"""Land Rate Agent - IOS land lease rate per acre per month."""

import logging

from tenant_research.agents.base import AgentResult, BaseAgent
from tenant_research.agents.building_rate_agent import VALID_CONFIDENCE, default_estimate
from tenant_research.agents.prompts.land_rate import LAND_RATE_TEMPLATE
from tenant_research.domain.enums import AIProvider
from tenant_research.infra.ai_gateway import AIGateway

logger = logging.getLogger(__name__)


def _positive_number(value) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


class LandRateAgent(BaseAgent):
    """Estimates industrial outside storage rates in USD/acre/month.

    The same prompt runs on Gemini or OpenAI; the land-rate route asks both
    and returns the two estimates side by side.
    """

    def __init__(self, gateway: AIGateway, provider: AIProvider = AIProvider.GEMINI):
        super().__init__(
            agent_name=f"land_rate_{provider.value}",
            gateway=gateway,
            provider=provider,
            temperature=0.3,
            max_tokens=2000,
        )

    async def estimate(
        self,
        address: str,
        property_type: str = "",
        building_size: str = "",
    ) -> AgentResult:
        """Always succeeds; an unusable answer yields ``default_estimate()``."""
        prompt = LAND_RATE_TEMPLATE.format(
            address=address,
            property_type=property_type or "Not specified",
            building_size=building_size or "Not specified",
        )

        result = await self.generate_json(prompt)
        if not result.ok:
            logger.warning(
                "[%s] Land rate estimation failed for %s, using default: %s",
                self.agent_name,
                address,
                result.error,
            )
            return AgentResult.success(data=default_estimate(), latency_ms=result.latency_ms)

        average = _positive_number(result.data.get("average_market_rate"))
        confidence = result.data.get("confidence")
        if average is None or confidence not in VALID_CONFIDENCE:
            logger.warning(
                "[%s] Invalid land rate format for %s: %s",
                self.agent_name,
                address,
                result.data,
            )
            return AgentResult.success(data=default_estimate(), latency_ms=result.latency_ms)

        estimate = {
            "average_market_rate": average,
            "estimated_lower_end": _positive_number(result.data.get("estimated_lower_end")),
            "estimated_upper_end": _positive_number(result.data.get("estimated_upper_end")),
            "confidence": confidence,
        }
        logger.info(
            "[%s] Estimated %.0f $/acre/month (%s confidence) for %s",
            self.agent_name,
            average,
            confidence,
            address,
        )
        return AgentResult.success(data=estimate, latency_ms=result.latency_ms)
