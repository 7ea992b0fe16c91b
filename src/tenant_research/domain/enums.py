"""Domain enumerations for tenant research.

All enums use the (str, Enum) pattern to ensure JSON serialization compatibility.
"""

from enum import Enum


class AIProvider(str, Enum):
    """Generative-AI providers reachable through the gateway."""

    OPENAI = "openai"
    GEMINI = "gemini"
    CLAUDE = "claude"


class IndustryType(str, Enum):
    """Industry sectors a discovered tenant can be classified under."""

    THIRD_PARTY_LOGISTICS = "3PL"
    MANUFACTURING = "Manufacturing"
    FOOD = "Food"
    TECH = "Tech"
    RETAIL = "Retail"
    OTHER = "Other"


class BenefitType(str, Enum):
    """Kind of space a tenant would take in the property."""

    WAREHOUSE_SPACE = "warehouse_space"
    OFFICE_SPACE = "office_space"
    MIXED_USE = "mixed_use"
    OTHER = "other"


class ScoreSource(str, Enum):
    """Which scoring path produced a tenant's final score."""

    HEURISTIC = "heuristic"
    AI = "ai"
    ALGORITHMIC_FALLBACK = "algorithmic_fallback"


class AnalysisStage(str, Enum):
    """Pipeline stages; values double as keys of the per-run error map."""

    PROPERTY_ANALYSIS = "property_analysis"
    MARKET_ANALYSIS = "market_analysis"
    TENANT_RANKING = "tenant_ranking"
    AI_SCORING = "ai_scoring"
