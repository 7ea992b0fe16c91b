"""Tenant Scoring Agent - one batched OpenAI call that scores every candidate."""

import logging
from typing import Optional

from tenant_research.agents.base import AgentResult, BaseAgent
from tenant_research.agents.prompts.tenant_scoring import (
    TENANT_LINE_TEMPLATE,
    TENANT_SCORING_TEMPLATE,
)
from tenant_research.domain.enums import AIProvider
from tenant_research.domain.schemas import PropertyData
from tenant_research.infra.ai_gateway import AIGateway

logger = logging.getLogger(__name__)

TOKENS_PER_TENANT = 200
BASE_TOKENS = 500


def scoring_token_budget(tenant_count: int) -> int:
    return tenant_count * TOKENS_PER_TENANT + BASE_TOKENS


def build_scoring_prompt(
    tenants: list[dict],
    property_data: PropertyData,
    market_analysis: Optional[dict],
) -> str:
    market_analysis = market_analysis or {}
    tenant_lines = "\n".join(
        TENANT_LINE_TEMPLATE.format(
            index=idx + 1,
            company=tenant.get("company"),
            operations=tenant.get("operations"),
            industry_type=tenant.get("industry_type"),
            distance=tenant.get("distance"),
        )
        for idx, tenant in enumerate(tenants)
    )
    return TENANT_SCORING_TEMPLATE.format(
        tenant_count=len(tenants),
        address=property_data.address,
        property_type=property_data.type,
        square_footage=property_data.square_footage,
        acreage=property_data.acreage or 0,
        features=", ".join(property_data.features) or "Standard industrial",
        area_growth_score=market_analysis.get("area_growth_score") or 7,
        area_growth_trends=market_analysis.get("area_growth_trends") or "Positive growth",
        national_industry_trend=market_analysis.get("national_industry_trend") or "Stable growth",
        tenant_lines=tenant_lines,
    )


class TenantScoringAgent(BaseAgent):
    """Scores all discovered tenants in a single request."""

    def __init__(self, gateway: AIGateway):
        super().__init__(
            agent_name="tenant_scoring",
            gateway=gateway,
            provider=AIProvider.OPENAI,
            temperature=0.3,
        )

    async def score(
        self,
        tenants: list[dict],
        property_data: PropertyData,
        market_analysis: Optional[dict],
    ) -> AgentResult:
        """Request AI scores for *tenants*.

        Returns:
            AgentResult whose ``data`` is the raw ``tenant_scores`` list,
            or a failure when the call or JSON parsing failed.
        """
        logger.info("[%s] Generating AI scores for %d tenants", self.agent_name, len(tenants))

        prompt = build_scoring_prompt(tenants, property_data, market_analysis)
        result = await self.generate_json(prompt, max_tokens=scoring_token_budget(len(tenants)))
        if not result.ok:
            return result

        scores = result.data.get("tenant_scores")
        if not isinstance(scores, list):
            return AgentResult.failure(
                "Scoring response has no 'tenant_scores' list",
                latency_ms=result.latency_ms,
            )
        return AgentResult.success(
            data=[s for s in scores if isinstance(s, dict)],
            latency_ms=result.latency_ms,
        )
