"""AI tenant scoring: normalization, algorithmic fallback and merge.

The model's batched ``tenant_scores`` are never trusted as-is: every
numeric field is clamped into its legal range and every text field is
default-filled before the scores are merged back into the heuristic
ranking. When the model call or its JSON fails, the same shape is
produced from the heuristic formulas and tagged ``algorithmic_fallback``.
"""

from __future__ import annotations

import logging
from typing import Optional

from tenant_research.agents.tenant_scoring_agent import TenantScoringAgent
from tenant_research.domain.enums import ScoreSource
from tenant_research.domain.schemas import PropertyData
from tenant_research.services.tenant_scorer import (
    as_number,
    clamp,
    compute_tenant_scores,
    parse_distance,
    sort_by_score,
)

logger = logging.getLogger(__name__)

AI_SCORE_MIN = 10
AI_SCORE_MAX = 100

DEFAULT_SUB_SCORE = 5
DEFAULT_FINAL_SCORE = 50

DEFAULT_REASONING = "AI analysis completed"
DEFAULT_KEY_STRENGTHS = ["Operational fit", "Market position"]
DEFAULT_RISK_FACTORS = ["Market competition", "Economic factors"]


def _normalize(value, low: float, high: float, default: float) -> float | int:
    number = as_number(value)
    if not number:
        number = default
    number = clamp(number, low, high)
    return int(number) if float(number).is_integer() else number


def _string_list(value, default: list[str]) -> list[str]:
    if isinstance(value, list) and value:
        return [str(item) for item in value]
    return list(default)


def validate_and_normalize_scores(raw_scores: list[dict]) -> list[dict]:
    """Clamp and default-fill model-reported scores.

    Sub-scores are clamped to [1, 10] (default 5), ``final_score`` to
    [10, 100] (default 50).
    """
    normalized = []
    for entry in raw_scores:
        normalized.append({
            "company": str(entry.get("company") or "Unknown"),
            "market_fit": _normalize(entry.get("market_fit"), 1, 10, DEFAULT_SUB_SCORE),
            "property_match": _normalize(entry.get("property_match"), 1, 10, DEFAULT_SUB_SCORE),
            "growth_potential": _normalize(entry.get("growth_potential"), 1, 10, DEFAULT_SUB_SCORE),
            "final_score": _normalize(
                entry.get("final_score"), AI_SCORE_MIN, AI_SCORE_MAX, DEFAULT_FINAL_SCORE
            ),
            "reasoning": entry.get("reasoning") or DEFAULT_REASONING,
            "key_strengths": _string_list(entry.get("key_strengths"), DEFAULT_KEY_STRENGTHS),
            "risk_factors": _string_list(entry.get("risk_factors"), DEFAULT_RISK_FACTORS),
        })
    return normalized


def _key_strengths(tenant: dict, property_data: dict) -> list[str]:
    strengths = ["Market position"]
    industry = tenant.get("industry_type")
    if industry == "3PL":
        strengths.append("Logistics expertise")
    if industry == "Tech":
        strengths.append("Innovation capacity")
    miles = parse_distance(tenant.get("distance"))
    if miles is not None and miles <= 30:
        strengths.append("Strategic location")
    if (property_data.get("square_footage") or 0) >= 100_000:
        strengths.append("Scale operations")
    return strengths[:3]


def generate_fallback_scores(
    tenants: list[dict],
    property_data: dict,
    market_analysis: Optional[dict],
) -> list[dict]:
    """Re-derive scores from the heuristic formulas in the AI score shape."""
    fallback = []
    for tenant in tenants:
        scores = compute_tenant_scores(tenant, property_data, market_analysis)
        fallback.append({
            "company": tenant.get("company") or "Unknown",
            "market_fit": scores["market_fit"],
            "property_match": scores["property_match"],
            "growth_potential": scores["growth_potential"],
            "final_score": scores["score"],
            "reasoning": (
                f"Algorithmic analysis: {tenant.get('industry_type') or 'Other'} company "
                f"with a property match of {scores['property_match']}/10 and "
                f"growth potential of {scores['growth_potential']}/10."
            ),
            "key_strengths": _key_strengths(tenant, property_data),
            "risk_factors": ["Market competition", "Economic uncertainty"],
        })
    return fallback


def merge_ai_scores(
    tenants: list[dict],
    ai_scores: list[dict],
    source: ScoreSource = ScoreSource.AI,
) -> list[dict]:
    """Overlay normalized AI scores onto heuristic tenants by exact company name.

    Tenants with no matching entry are returned unchanged. The result is
    re-sorted descending by ``score`` (stable).
    """
    by_company: dict[str, dict] = {}
    for entry in ai_scores:
        by_company.setdefault(entry["company"], entry)

    merged = []
    for tenant in tenants:
        entry = by_company.get(tenant.get("company"))
        if entry is None:
            logger.warning("No AI score found for %s", tenant.get("company"))
            merged.append(tenant)
            continue
        merged.append({
            **tenant,
            "market_fit": entry["market_fit"],
            "property_match": entry["property_match"],
            "growth_potential": entry["growth_potential"],
            "score": entry["final_score"],
            "score_source": source.value,
            "ai_reasoning": entry["reasoning"],
            "key_strengths": entry["key_strengths"],
            "risk_factors": entry["risk_factors"],
        })
    return sort_by_score(merged)


async def score_tenants_with_ai(
    agent: TenantScoringAgent,
    tenants: list[dict],
    property_data: PropertyData,
    market_analysis: Optional[dict],
) -> tuple[list[dict], ScoreSource]:
    """Run the batched AI scoring call, falling back to heuristics on failure.

    Returns the merged, re-sorted tenant list and the source the scores
    came from. Never raises for a provider or parse failure.
    """
    result = await agent.score(tenants, property_data, market_analysis)
    if result.ok:
        scores = validate_and_normalize_scores(result.data)
        source = ScoreSource.AI
        logger.info("Generated AI scores for %d tenants", len(scores))
    else:
        logger.warning("AI scoring failed, using algorithmic fallback: %s", result.error)
        scores = generate_fallback_scores(tenants, property_data.model_dump(), market_analysis)
        source = ScoreSource.ALGORITHMIC_FALLBACK

    return merge_ai_scores(tenants, scores, source), source
