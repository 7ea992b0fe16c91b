"""Deterministic heuristic tenant scorer.

Pure-function module: NO LLM, NO network access.

Every candidate tenant gets three 1-10 sub-scores, each the rounded
average of three component estimates:

    - Market Fit       (35%): area growth, industry growth, name variation
    - Property Match   (40%): operational match, building fit, distance bonus
    - Growth Potential (25%): capacity match, market timing, competitive pressure

The final ``score`` is ``round(10 × weighted sum)`` clamped to [15, 95].

All inputs are plain dicts (tenant dicts as returned by discovery, the
property as ``PropertyData.model_dump()``, the market analysis as parsed
from the model) so the scorer can be used from the pipeline, from the AI
fallback path and from tests alike.
"""

from __future__ import annotations

import math
import re
from typing import Optional

# ── Weights ──────────────────────────────────────────────────────────────────

W_MARKET_FIT = 0.35
W_PROPERTY_MATCH = 0.40
W_GROWTH_POTENTIAL = 0.25

HEURISTIC_SCORE_MIN = 15
HEURISTIC_SCORE_MAX = 95

SUB_SCORE_MIN = 1
SUB_SCORE_MAX = 10

# Used when the model reports no (or an unreadable) area growth score
DEFAULT_AREA_GROWTH = 7

# Miles assumed when a tenant's distance cannot be parsed
DEFAULT_DISTANCE_MILES = 50

# ── Lookup tables ────────────────────────────────────────────────────────────

INDUSTRY_GROWTH_SCORES = {
    "3PL": 9,
    "Tech": 10,
    "Food": 6,
    "Manufacturing": 5,
    "Retail": 4,
    "Other": 5,
}

# Ideal building size (sq ft) per industry: (min, max)
IDEAL_SIZE_RANGES = {
    "3PL": (50_000, 300_000),
    "Manufacturing": (25_000, 200_000),
    "Food": (30_000, 150_000),
    "Tech": (20_000, 100_000),
    "Retail": (40_000, 250_000),
}
DEFAULT_SIZE_RANGE = (30_000, 200_000)

# (max miles, bonus), checked in order
DISTANCE_BONUS_BRACKETS = ((15, 9), (30, 7), (50, 5), (75, 3))
DISTANCE_BONUS_FAR = 1


# ── Helpers ──────────────────────────────────────────────────────────────────

def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def as_number(value) -> Optional[float]:
    """Best-effort numeric read of a model-supplied value."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


_LEADING_INT = re.compile(r"^\s*(-?\d+)")


def parse_distance(value) -> Optional[int]:
    """Parse the leading integer of a distance such as ``"12 miles"``.

    Returns ``None`` when no number can be read.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return int(value)
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


def distance_miles(value) -> int:
    parsed = parse_distance(value)
    return DEFAULT_DISTANCE_MILES if parsed is None else parsed


def _property_size(property_data: dict) -> int:
    return property_data.get("square_footage") or 0


def _average_score(components: tuple[float, float, float]) -> int:
    return int(clamp(round_half_up(sum(components) / 3), SUB_SCORE_MIN, SUB_SCORE_MAX))


# ── Component estimates ──────────────────────────────────────────────────────

def area_growth_score(market_analysis: Optional[dict]) -> float:
    raw = as_number((market_analysis or {}).get("area_growth_score"))
    if not raw:
        return DEFAULT_AREA_GROWTH
    return clamp(raw, SUB_SCORE_MIN, SUB_SCORE_MAX)


def industry_growth_score(industry_type: Optional[str]) -> int:
    return INDUSTRY_GROWTH_SCORES.get(industry_type or "", 5)


def name_variation(company: str) -> int:
    """Deterministic 1-3 spread so same-industry tenants don't tie."""
    return len(str(company or "")) % 3 + 1


def operational_match(company: str, property_data: dict) -> int:
    score = 5
    name = str(company or "").lower()
    size = _property_size(property_data)
    property_type = property_data.get("type")

    if "amazon" in name or "fedex" in name:
        if property_type == "warehouse":
            score += 2
        if size > 50_000:
            score += 1

    if "walmart" in name or "sysco" in name:
        if property_type == "cold-storage":
            score += 3
        if size > 25_000:
            score += 1

    return min(10, score)


def building_fit_score(tenant: dict, property_data: dict) -> int:
    score = 2
    benefit_type = tenant.get("benefit_type")
    industry = tenant.get("industry_type")
    property_type = property_data.get("type")
    size = _property_size(property_data)

    if benefit_type == "warehouse_space" and property_type == "warehouse":
        score += 5
    elif benefit_type == "mixed_use":
        score += 3
    elif benefit_type == "office_space" and property_type == "warehouse":
        score += 1

    if 100_000 <= size <= 200_000:
        score += 3
    elif 50_000 <= size <= 300_000:
        score += 2
    elif 25_000 <= size <= 500_000:
        score += 1

    if industry == "3PL" and size >= 100_000:
        score += 2
    if industry == "Food" and "cold" in (property_data.get("features") or []):
        score += 3
    if industry == "Manufacturing" and size >= 75_000:
        score += 2

    return min(10, score)


def distance_bonus(distance) -> int:
    miles = distance_miles(distance)
    for max_miles, bonus in DISTANCE_BONUS_BRACKETS:
        if miles <= max_miles:
            return bonus
    return DISTANCE_BONUS_FAR


def capacity_match(tenant: dict, property_data: dict) -> int:
    """9 inside the industry's ideal size range, 7 within 30% of it, else 5."""
    size = _property_size(property_data)
    low, high = IDEAL_SIZE_RANGES.get(tenant.get("industry_type"), DEFAULT_SIZE_RANGE)

    if low <= size <= high:
        return 9
    if low * 0.7 <= size <= high * 1.3:
        return 7
    return 5


def market_timing(tenant: dict, market_analysis: Optional[dict]) -> int:
    score = 4
    growth = as_number((market_analysis or {}).get("area_growth_score"))
    if growth is not None:
        if growth >= 8:
            score += 4
        elif growth >= 6:
            score += 2
        elif growth >= 4:
            score += 1

    industry = tenant.get("industry_type")
    if industry == "3PL":
        score += 2
    elif industry == "Tech":
        score += 3
    elif industry == "Food":
        score += 1

    if "hub" in str(tenant.get("nearby_location") or ""):
        score += 1

    return min(10, score)


def competitive_pressure(tenant: dict) -> int:
    score = 3
    industry = tenant.get("industry_type")
    operations = str(tenant.get("operations") or "")

    if industry == "3PL":
        score += 3
    elif industry == "Tech":
        score += 4
    elif industry == "Food":
        score += 2
    elif industry == "Manufacturing":
        score += 1

    if "distribution" in operations or "logistics" in operations:
        score += 2
    if "manufacturing" in operations or "assembly" in operations:
        score += 1
    if "tech" in operations or "software" in operations:
        score += 3

    miles = distance_miles(tenant.get("distance"))
    if miles < 20:
        score += 2
    elif miles < 40:
        score += 1

    return min(10, score)


def strategic_fit(tenant: dict) -> int:
    score = 5
    miles = parse_distance(tenant.get("distance"))
    if miles is not None:
        if miles < 50:
            score += 2
        elif miles < 100:
            score += 1
    return min(10, score)


# ── Main scorer ──────────────────────────────────────────────────────────────

def weighted_score(market_fit: float, property_match: float, growth_potential: float) -> int:
    """Unclamped 1-100 composite of the three sub-scores."""
    return round_half_up(
        (
            market_fit * W_MARKET_FIT
            + property_match * W_PROPERTY_MATCH
            + growth_potential * W_GROWTH_POTENTIAL
        )
        * 10
    )


def compute_tenant_scores(
    tenant: dict,
    property_data: dict,
    market_analysis: Optional[dict],
) -> dict:
    """Compute the heuristic sub-scores and final score for one tenant.

    Returns
    -------
    dict
        ``market_fit``, ``property_match``, ``growth_potential`` (1-10)
        and ``score`` (15-95).
    """
    company = str(tenant.get("company") or "")

    market_fit = _average_score((
        area_growth_score(market_analysis),
        industry_growth_score(tenant.get("industry_type")),
        name_variation(company),
    ))
    property_match = _average_score((
        operational_match(company, property_data),
        building_fit_score(tenant, property_data),
        distance_bonus(tenant.get("distance")),
    ))
    growth_potential = _average_score((
        capacity_match(tenant, property_data),
        market_timing(tenant, market_analysis),
        competitive_pressure(tenant),
    ))

    score = clamp(
        weighted_score(market_fit, property_match, growth_potential),
        HEURISTIC_SCORE_MIN,
        HEURISTIC_SCORE_MAX,
    )

    return {
        "market_fit": market_fit,
        "property_match": property_match,
        "growth_potential": growth_potential,
        "score": int(score),
    }


def sort_by_score(tenants: list[dict]) -> list[dict]:
    """Descending by ``score``; equal scores keep their input order."""
    return sorted(tenants, key=lambda t: t.get("score") or 0, reverse=True)
