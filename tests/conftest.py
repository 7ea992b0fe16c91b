"""Shared test infrastructure for the Tenant Research test suite.

Provides:
- FakeTransport: records request bodies and replays canned provider responses
- openai_raw / gemini_raw / claude_raw: provider-native response dict builders
- make_gateway: factory for an AIGateway wired to fake transports
- make_property: factory for PropertyData
- make_tenant / make_tenants: factories for discovered tenant dicts
- scripted_gateway: MagicMock gateway answering each pipeline prompt by kind
"""

import json
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from tenant_research.domain.enums import AIProvider
from tenant_research.domain.schemas import PropertyData
from tenant_research.infra.ai_gateway import AIGateway, ModelChoice

MODELS = {
    AIProvider.OPENAI: ModelChoice("gpt-4o", "gpt-4o-mini"),
    AIProvider.GEMINI: ModelChoice("gemini-2.5-flash", "gemini-2.0-flash"),
    AIProvider.CLAUDE: ModelChoice("claude-sonnet-4-20250514", "claude-3-5-haiku-latest"),
}


# ---------------------------------------------------------------------------
# Provider-native responses
# ---------------------------------------------------------------------------

def openai_raw(text: Optional[str], finish_reason: str = "stop") -> dict:
    return {
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": text},
                "finish_reason": finish_reason,
            }
        ]
    }


def gemini_raw(text: Optional[str], finish_reason: str = "STOP") -> dict:
    parts = [{"text": text}] if text is not None else []
    return {
        "candidates": [
            {
                "content": {"role": "model", "parts": parts},
                "finish_reason": finish_reason,
            }
        ]
    }


def claude_raw(text: Optional[str], stop_reason: str = "end_turn") -> dict:
    content = [{"type": "text", "text": text}] if text is not None else []
    return {"content": content, "stop_reason": stop_reason}


class FakeTransport:
    """Transport double: returns queued responses (or raises queued errors)."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.bodies: list[dict] = []

    async def send(self, body: dict) -> dict:
        self.bodies.append(body)
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    @property
    def models(self) -> list[str]:
        return [body["model"] for body in self.bodies]


@pytest.fixture
def make_gateway():
    """Factory: ``make_gateway(openai=FakeTransport(...), gemini=...)``."""

    def _make(openai=None, gemini=None, claude=None) -> AIGateway:
        transports = {
            AIProvider.OPENAI: openai or FakeTransport(),
            AIProvider.GEMINI: gemini or FakeTransport(),
            AIProvider.CLAUDE: claude or FakeTransport(),
        }
        return AIGateway(transports=transports, models=MODELS)

    return _make


# ---------------------------------------------------------------------------
# Domain factories
# ---------------------------------------------------------------------------

@pytest.fixture
def make_property():
    def _make(**overrides) -> PropertyData:
        data = {
            "address": "1200 Industrial Pkwy, Dallas, TX 75201",
            "type": "warehouse",
            "square_footage": 120_000,
            "acreage": 8.5,
            "features": ["rail access", "cold"],
            "use_ai_scoring": False,
        }
        data.update(overrides)
        return PropertyData(**data)

    return _make


INDUSTRIES = ["3PL", "Manufacturing", "Food", "Tech", "Retail", "Other"]
BENEFIT_TYPES = ["warehouse_space", "office_space", "mixed_use", "other"]


@pytest.fixture
def make_tenant():
    def _make(company: str = "Lone Star Logistics", **overrides) -> dict:
        tenant = {
            "company": company,
            "operations": "regional distribution and logistics",
            "industry_type": "3PL",
            "nearby_location": "Dallas logistics hub",
            "distance": "12",
            "benefit_type": "warehouse_space",
        }
        tenant.update(overrides)
        return tenant

    return _make


@pytest.fixture
def make_tenants(make_tenant):
    """``make_tenants(n)`` builds n distinct tenants with varied attributes."""

    def _make(count: int) -> list[dict]:
        return [
            make_tenant(
                company=f"Company {chr(65 + i % 26)}{i}",
                industry_type=INDUSTRIES[i % len(INDUSTRIES)],
                benefit_type=BENEFIT_TYPES[i % len(BENEFIT_TYPES)],
                distance=str(5 + i * 7),
                operations=["software fulfillment", "food distribution", "assembly", "retail"][i % 4],
            )
            for i in range(count)
        ]

    return _make


# ---------------------------------------------------------------------------
# Scripted gateway for pipeline / route tests
# ---------------------------------------------------------------------------

BUILDING_CONFIG_JSON = {
    "configuration": "Cross-dock warehouse with 24 loading docks and 120 parking spaces",
    "property_features": ["24 docks", "32ft clear height", "rail spur"],
    "brief_property_info": "Industrial zoning near I-35",
    "market_fit": "Well suited to regional distribution",
    "technical_specs": {"building_type": "warehouse", "total_area": 120000},
    "target_use_types": ["warehouse_space"],
}

MARKET_JSON = {
    "area_growth_trends": "Strong job growth and new highway infrastructure",
    "national_industry_trend": "E-commerce driving logistics demand",
    "booming_industry": "Logistics",
    "local_trends": "Dallas continues to attract distribution operations.",
    "area_growth_score": 8,
    "demand_indicators": ["job growth", "population growth"],
    "competitive_factors": ["central US location"],
}


def prompt_kind(prompt: str) -> str:
    if prompt.startswith("Analyze area growth trends"):
        return "market"
    if prompt.startswith("Discover "):
        return "discovery"
    if "Analyze and score these" in prompt:
        return "scoring"
    return "other"


@pytest.fixture
def scripted_gateway():
    """Factory for a mock gateway answering by prompt kind.

    Each answer is either a string (returned), an Exception (raised) or a
    dict (serialized to JSON text).
    """

    def _make(building=None, market=None, discovery=None, scoring=None):
        answers = {
            "building": building if building is not None else BUILDING_CONFIG_JSON,
            "market": market if market is not None else MARKET_JSON,
            "discovery": discovery if discovery is not None else {"tenants": []},
            "scoring": scoring if scoring is not None else {"tenant_scores": []},
        }

        def _answer(kind: str):
            answer = answers[kind]
            if isinstance(answer, Exception):
                raise answer
            if isinstance(answer, (dict, list)):
                return json.dumps(answer)
            return answer

        async def _openai(prompt, **kwargs):
            return _answer(prompt_kind(prompt))

        async def _gemini(prompt, **kwargs):
            return _answer("building")

        gateway = MagicMock(spec=AIGateway)
        gateway.call_openai = AsyncMock(side_effect=_openai)
        gateway.call_gemini = AsyncMock(side_effect=_gemini)
        gateway.call_claude = AsyncMock(return_value="{}")
        return gateway

    return _make
