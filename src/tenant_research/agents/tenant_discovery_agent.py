"""Tenant Discovery Agent - asks OpenAI for emerging companies near a property."""

import logging
from typing import Optional

from tenant_research.agents.base import AgentResult, BaseAgent
from tenant_research.agents.prompts.tenant_discovery import TENANT_DISCOVERY_TEMPLATE
from tenant_research.domain.enums import AIProvider, BenefitType, IndustryType
from tenant_research.domain.schemas import PromptConfig, PropertyData
from tenant_research.infra.ai_gateway import AIGateway

logger = logging.getLogger(__name__)

# Never ask for fewer candidates than this, even with a small result_count
MIN_DISCOVERY_COUNT = 20

# Upper bound quoted to the model for the nearby-location radius
MAX_LOCATION_RADIUS_MILES = 300


def build_discovery_prompt(
    property_data: PropertyData,
    building_config: Optional[dict],
    market_analysis: Optional[dict],
    config: PromptConfig,
) -> str:
    """Render the discovery prompt from the property and the config snapshot.

    Missing stage outputs (``None``) fall back to generic wording so that
    discovery can still run after an earlier stage failed.
    """
    building_config = building_config or {}
    market_analysis = market_analysis or {}

    if config.discovery_strategy == "emerging_scaling_companies":
        strategy_label = "EMERGING and SCALING"
    else:
        strategy_label = "potential"

    excluded = ", ".join(config.exclude_companies)
    return TENANT_DISCOVERY_TEMPLATE.format(
        discover_count=max(MIN_DISCOVERY_COUNT, config.result_count),
        strategy_label=strategy_label,
        excluded=excluded,
        address=property_data.address,
        property_type=property_data.type,
        square_footage=property_data.square_footage,
        configuration=building_config.get("configuration") or "Industrial facility",
        features=", ".join(property_data.features) or "Standard industrial",
        area_growth_trends=market_analysis.get("area_growth_trends") or "Growing market",
        national_industry_trend=market_analysis.get("national_industry_trend") or "Positive trends",
        search_radius_miles=config.search_radius_miles,
        strategy_text=config.discovery_strategy.replace("_", " "),
        preferred_company_size=config.preferred_company_size.replace("_", " "),
        focus_industries=", ".join(config.focus_industries),
        target_type_lines="\n".join(f"- {t}" for t in config.target_types),
        location_radius=min(MAX_LOCATION_RADIUS_MILES, config.search_radius_miles),
        industry_choices="|".join(config.focus_industries),
        target_types=", ".join(config.target_types),
        result_count=config.result_count,
        tone=config.tone,
    )


def _coerce_enum(value, enum_cls, fallback):
    if isinstance(value, str):
        for member in enum_cls:
            if value.strip().lower() == member.value.lower():
                return member.value
    return fallback.value


def _as_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    return str(value)


def normalize_tenant(raw: dict) -> dict:
    """Coerce the model's tenant fields into the types downstream scoring expects.

    Unknown or non-string ``industry_type`` / ``benefit_type`` values fall
    back to ``Other`` / ``other``; free-text fields become strings.
    """
    tenant = dict(raw)
    tenant["company"] = str(raw["company"]).strip()
    tenant["industry_type"] = _coerce_enum(raw.get("industry_type"), IndustryType, IndustryType.OTHER)
    if raw.get("benefit_type") is not None:
        tenant["benefit_type"] = _coerce_enum(raw["benefit_type"], BenefitType, BenefitType.OTHER)
    for field in ("operations", "nearby_location", "distance"):
        if field in raw:
            tenant[field] = _as_text(raw[field])
    return tenant


class TenantDiscoveryAgent(BaseAgent):
    """Finds non-Fortune-500 companies whose operations fit the property."""

    def __init__(self, gateway: AIGateway):
        super().__init__(
            agent_name="tenant_discovery",
            gateway=gateway,
            provider=AIProvider.OPENAI,
            temperature=0.3,
            max_tokens=3000,
        )

    async def discover(
        self,
        property_data: PropertyData,
        building_config: Optional[dict],
        market_analysis: Optional[dict],
        config: PromptConfig,
    ) -> AgentResult:
        """Discover candidate tenants.

        Returns:
            AgentResult whose ``data`` is the list of raw tenant dicts
            (entries without a ``company`` name are dropped).
        """
        logger.info("[%s] Searching for emerging and scaling companies", self.agent_name)

        prompt = build_discovery_prompt(property_data, building_config, market_analysis, config)
        result = await self.generate_json(prompt)
        if not result.ok:
            return result

        raw_tenants = result.data.get("tenants")
        if not isinstance(raw_tenants, list):
            return AgentResult.failure(
                "Discovery response has no 'tenants' list",
                latency_ms=result.latency_ms,
            )

        tenants = [
            normalize_tenant(t)
            for t in raw_tenants
            if isinstance(t, dict) and t.get("company")
        ]
        logger.info(
            "[%s] Discovered %d potential emerging companies",
            self.agent_name,
            len(tenants),
        )
        return AgentResult.success(data=tenants, latency_ms=result.latency_ms)
