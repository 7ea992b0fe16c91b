"""Pydantic v2 schemas for API request/response validation."""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Property input
# ---------------------------------------------------------------------------


class PropertyData(BaseModel):
    """Property submitted for analysis.

    ``address`` and ``type`` are required for an analysis but optional
    here so that missing fields are reported by the pipeline's own
    validation (400 with the list of missing fields) instead of a 422.
    """

    address: str | None = None
    type: str | None = None
    square_footage: int | None = None
    acreage: float | None = None
    features: list[str] = []
    use_ai_scoring: bool = False


class AnalyzeRequest(BaseModel):
    """Request body for a tenant research analysis."""

    property_data: PropertyData | None = None
    with_progress: bool = False
    session_id: str | None = None


class PropertyEstimateRequest(BaseModel):
    """Request body shared by the single-call property estimates."""

    property_address: str = ""
    property_type: str = ""
    building_size: str = ""


class InvestmentRecommendationRequest(PropertyEstimateRequest):
    asking_price: str = ""


# ---------------------------------------------------------------------------
# Prompt configuration
# ---------------------------------------------------------------------------


DEFAULT_EXCLUDED_COMPANIES = ["Amazon", "Walmart", "FedEx", "UPS", "Home Depot", "Lowe's"]

DEFAULT_TARGET_TYPES = [
    "Regional 3PL providers",
    "Growing food distributors",
    "Emerging manufacturers",
    "Tech companies needing warehouses",
    "Regional retail distributors",
    "Specialty logistics providers",
]

DEFAULT_RANKING_CRITERIA = [
    "area_growth_trends",
    "operational_needs_match",
    "capacity_requirements",
    "industry_growth",
    "building_fit",
]


class PromptConfig(BaseModel):
    """Tunable discovery and scoring parameters."""

    focus: str = (
        "AI-driven building configuration analysis, discover emerging companies "
        "(non-Fortune 500 tenants) based on property characteristics and area economic trends"
    )
    discovery_strategy: str = "emerging_scaling_companies"
    exclude_companies: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDED_COMPANIES))
    target_types: list[str] = Field(default_factory=lambda: list(DEFAULT_TARGET_TYPES))
    search_radius_miles: int = Field(default=100, ge=1)
    result_count: int = Field(default=20, ge=1, le=50)
    ranking_criteria: list[str] = Field(default_factory=lambda: list(DEFAULT_RANKING_CRITERIA))
    tone: str = "analytical, data-driven, precise"
    preferred_company_size: str = "emerging_to_midsize"
    focus_industries: list[str] = Field(
        default_factory=lambda: ["3PL", "Manufacturing", "Food", "Tech", "Retail"]
    )


class PromptConfigUpdate(BaseModel):
    """Partial update of the prompt configuration; unset fields are kept."""

    focus: str | None = None
    discovery_strategy: str | None = None
    exclude_companies: list[str] | None = None
    target_types: list[str] | None = None
    search_radius_miles: int | None = None
    result_count: int | None = None
    ranking_criteria: list[str] | None = None
    tone: str | None = None
    preferred_company_size: str | None = None
    focus_industries: list[str] | None = None
