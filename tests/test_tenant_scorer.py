"""Unit tests for the deterministic heuristic tenant scorer."""

from __future__ import annotations

import itertools

import pytest

from tenant_research.services.tenant_scorer import (
    HEURISTIC_SCORE_MAX,
    HEURISTIC_SCORE_MIN,
    W_GROWTH_POTENTIAL,
    W_MARKET_FIT,
    W_PROPERTY_MATCH,
    area_growth_score,
    as_number,
    building_fit_score,
    capacity_match,
    competitive_pressure,
    compute_tenant_scores,
    distance_bonus,
    industry_growth_score,
    market_timing,
    name_variation,
    operational_match,
    parse_distance,
    round_half_up,
    sort_by_score,
    strategic_fit,
    weighted_score,
)


# ---------------------------------------------------------------------------
# Helpers to build minimal dicts
# ---------------------------------------------------------------------------

def _property(type="warehouse", square_footage=120_000, features=None):
    return {
        "address": "1200 Industrial Pkwy, Dallas, TX 75201",
        "type": type,
        "square_footage": square_footage,
        "acreage": 8.5,
        "features": features if features is not None else ["rail access", "cold"],
        "use_ai_scoring": False,
    }


def _tenant(
    company="Lone Star Logistics",
    industry_type="3PL",
    operations="regional distribution and logistics",
    nearby_location="Dallas logistics hub",
    distance="12",
    benefit_type="warehouse_space",
):
    return {
        "company": company,
        "industry_type": industry_type,
        "operations": operations,
        "nearby_location": nearby_location,
        "distance": distance,
        "benefit_type": benefit_type,
    }


MARKET = {"area_growth_score": 8}


# ---------------------------------------------------------------------------
# Rounding and parsing
# ---------------------------------------------------------------------------


class TestRounding:
    @pytest.mark.parametrize("value,expected", [(2.5, 3), (6.5, 7), (6.49, 6), (7.0, 7)])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected


class TestParseDistance:
    @pytest.mark.parametrize(
        "raw,expected",
        [("12", 12), ("45 miles", 45), (" 7.9mi", 7), (30, 30), (12.8, 12), ("unknown", None), ("", None), (None, None)],
    )
    def test_parse(self, raw, expected):
        assert parse_distance(raw) == expected


class TestAsNumber:
    @pytest.mark.parametrize(
        "raw,expected",
        [(8, 8.0), (7.5, 7.5), (" 6 ", 6.0), ("high", None), (True, None), (None, None), ([8], None)],
    )
    def test_as_number(self, raw, expected):
        assert as_number(raw) == expected


# ---------------------------------------------------------------------------
# Component estimates
# ---------------------------------------------------------------------------


class TestComponents:
    def test_area_growth_defaults_to_seven(self):
        assert area_growth_score(None) == 7
        assert area_growth_score({}) == 7
        assert area_growth_score({"area_growth_score": "n/a"}) == 7

    def test_area_growth_clamped(self):
        assert area_growth_score({"area_growth_score": 14}) == 10
        assert area_growth_score({"area_growth_score": "8"}) == 8

    def test_industry_growth_table(self):
        assert industry_growth_score("Tech") == 10
        assert industry_growth_score("3PL") == 9
        assert industry_growth_score("Retail") == 4
        assert industry_growth_score("Aerospace") == 5
        assert industry_growth_score(None) == 5

    def test_name_variation_is_deterministic(self):
        assert name_variation("ABC") == 1
        assert name_variation("ABCD") == 2
        assert name_variation("ABCDE") == 3

    def test_operational_match_named_shippers(self):
        assert operational_match("FedEx Ground", _property()) == 8
        assert operational_match("Sysco Foods", _property(type="cold-storage")) == 9
        assert operational_match("Unknown Co", _property()) == 5

    def test_building_fit_capped_at_ten(self):
        assert building_fit_score(_tenant(), _property()) == 10

    def test_building_fit_office_in_small_warehouse(self):
        tenant = _tenant(benefit_type="office_space", industry_type="Tech")
        # 2 base + 1 office-in-warehouse + 1 size 25k-500k
        assert building_fit_score(tenant, _property(square_footage=30_000)) == 4

    def test_food_cold_feature_bonus(self):
        tenant = _tenant(industry_type="Food", benefit_type="other")
        with_cold = building_fit_score(tenant, _property(features=["cold"]))
        without_cold = building_fit_score(tenant, _property(features=["rail"]))
        assert with_cold - without_cold == 3

    @pytest.mark.parametrize(
        "distance,bonus",
        [("10", 9), ("15", 9), ("16", 7), ("30", 7), ("50", 5), ("75", 3), ("76", 1), ("far away", 5)],
    )
    def test_distance_bonus_brackets(self, distance, bonus):
        assert distance_bonus(distance) == bonus

    @pytest.mark.parametrize(
        "industry,size,expected",
        [
            ("3PL", 120_000, 9),
            ("Tech", 120_000, 7),
            ("Tech", 200_000, 5),
            ("Food", 25_000, 7),
            ("Other", 30_000, 9),
            ("Retail", 0, 5),
        ],
    )
    def test_capacity_match(self, industry, size, expected):
        assert capacity_match(_tenant(industry_type=industry), _property(square_footage=size)) == expected

    def test_market_timing(self):
        assert market_timing(_tenant(), MARKET) == 10
        assert market_timing(_tenant(industry_type="Retail", nearby_location="Plano"), {"area_growth_score": 5}) == 5
        assert market_timing(_tenant(industry_type="Retail", nearby_location="Plano"), None) == 4

    def test_competitive_pressure(self):
        assert competitive_pressure(_tenant()) == 10
        tenant = _tenant(industry_type="Retail", operations="retail stores", distance="90")
        assert competitive_pressure(tenant) == 3

    def test_strategic_fit(self):
        assert strategic_fit(_tenant(distance="10")) == 7
        assert strategic_fit(_tenant(distance="80")) == 6
        assert strategic_fit(_tenant(distance="150")) == 5
        assert strategic_fit(_tenant(distance="unknown")) == 5


# ---------------------------------------------------------------------------
# Main scorer
# ---------------------------------------------------------------------------


class TestComputeTenantScores:
    def test_reference_tenant(self):
        scores = compute_tenant_scores(_tenant(), _property(), MARKET)
        assert scores == {
            "market_fit": 6,
            "property_match": 8,
            "growth_potential": 10,
            "score": 78,
        }

    def test_score_consistent_with_weights(self):
        scores = compute_tenant_scores(_tenant(), _property(), MARKET)
        expected = round_half_up(
            10 * (
                W_MARKET_FIT * scores["market_fit"]
                + W_PROPERTY_MATCH * scores["property_match"]
                + W_GROWTH_POTENTIAL * scores["growth_potential"]
            )
        )
        assert scores["score"] == expected

    def test_deterministic(self):
        first = compute_tenant_scores(_tenant(), _property(), MARKET)
        for _ in range(5):
            assert compute_tenant_scores(_tenant(), _property(), MARKET) == first

    def test_missing_market_analysis_uses_defaults(self):
        scores = compute_tenant_scores(_tenant(), _property(), None)
        assert 1 <= scores["market_fit"] <= 10

    def test_scores_within_bounds_across_inputs(self):
        industries = ["3PL", "Manufacturing", "Food", "Tech", "Retail", "Other", "Unknown"]
        benefits = ["warehouse_space", "office_space", "mixed_use", "other"]
        distances = ["0", "14", "29", "49", "74", "200", "n/a"]
        sizes = [0, 10_000, 60_000, 150_000, 600_000]
        growths = [None, {"area_growth_score": 1}, {"area_growth_score": 10}]

        for industry, benefit, distance, size, growth in itertools.product(
            industries, benefits, distances, sizes, growths
        ):
            tenant = _tenant(industry_type=industry, benefit_type=benefit, distance=distance)
            scores = compute_tenant_scores(tenant, _property(square_footage=size), growth)
            assert HEURISTIC_SCORE_MIN <= scores["score"] <= HEURISTIC_SCORE_MAX
            for key in ("market_fit", "property_match", "growth_potential"):
                assert 1 <= scores[key] <= 10


class TestWeightedScore:
    def test_perfect_sub_scores(self):
        assert weighted_score(10, 10, 10) == 100

    def test_midpoint(self):
        assert weighted_score(5, 5, 5) == 50


class TestSortByScore:
    def test_descending_and_stable(self):
        tenants = [
            {"company": "A", "score": 50},
            {"company": "B", "score": 70},
            {"company": "C", "score": 50},
            {"company": "D", "score": 90},
        ]
        ordered = [t["company"] for t in sort_by_score(tenants)]
        assert ordered == ["D", "B", "A", "C"]
