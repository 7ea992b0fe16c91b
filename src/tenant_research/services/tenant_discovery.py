"""Local enrichment and ranking of discovered tenants.

Runs after the discovery agent returns its raw candidates. No network
calls happen here: each tenant gets its enrichment metrics, heuristic
scores and a benefit paragraph, then the list is sorted by ``score`` and
cut to the configured result count.
"""

import logging
from typing import Optional

from tenant_research.agents.prompts.tenant_discovery import BENEFIT_PARAGRAPH_TEMPLATE
from tenant_research.domain.enums import ScoreSource
from tenant_research.services import tenant_scorer

logger = logging.getLogger(__name__)


def enrich_tenant(tenant: dict, market_analysis: Optional[dict]) -> dict:
    """Attach strategic fit, market timing and competitive pressure."""
    return {
        **tenant,
        "strategic_fit": tenant_scorer.strategic_fit(tenant),
        "market_timing": tenant_scorer.market_timing(tenant, market_analysis),
        "competitive_pressure": tenant_scorer.competitive_pressure(tenant),
    }


def generate_benefit_paragraph(
    tenant: dict,
    property_data: dict,
    market_analysis: Optional[dict],
) -> str:
    market_analysis = market_analysis or {}
    features = " and ".join((property_data.get("features") or [])[:2]) or "modern facilities"
    benefit_type = tenant.get("benefit_type")
    square_footage = property_data.get("square_footage")

    return BENEFIT_PARAGRAPH_TEMPLATE.format(
        address=property_data.get("address"),
        company=tenant.get("company"),
        square_footage=f"{square_footage:,}" if square_footage else "N/A",
        space_label=str(benefit_type).replace("_", " ") if benefit_type else "industrial space",
        features=features,
        nearby_location=tenant.get("nearby_location") or "its current operations",
        area_growth=market_analysis.get("area_growth_trends") or "positive economic trends",
        national_trend=market_analysis.get("national_industry_trend") or "industry growth",
    )


def rank_tenants(
    raw_tenants: list[dict],
    property_data: dict,
    market_analysis: Optional[dict],
    result_count: int,
) -> list[dict]:
    """Enrich, heuristically score and rank discovered tenants.

    Args:
        raw_tenants: Tenant dicts as returned by the discovery agent.
        property_data: ``PropertyData.model_dump()``.
        market_analysis: Parsed market analysis, or ``None`` if that stage failed.
        result_count: Maximum number of tenants to keep.

    Returns:
        Up to ``result_count`` tenants, descending by ``score``.
    """
    scored = []
    for tenant in raw_tenants:
        enriched = enrich_tenant(tenant, market_analysis)
        scored.append({
            **enriched,
            **tenant_scorer.compute_tenant_scores(enriched, property_data, market_analysis),
            "score_source": ScoreSource.HEURISTIC.value,
            "benefit_paragraph": generate_benefit_paragraph(enriched, property_data, market_analysis),
        })

    ranking = tenant_scorer.sort_by_score(scored)[:result_count]
    logger.info("Ranked %d of %d emerging company candidates", len(ranking), len(raw_tenants))
    return ranking
