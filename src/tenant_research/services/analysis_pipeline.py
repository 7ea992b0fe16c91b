"""Multi-stage tenant research analysis.

Stages run strictly in order, each reported to the progress tracker (when
a session id is given) before it starts:

    1. Building configuration  (Gemini)
    2. Area growth / market trends  (OpenAI)
    3. Tenant discovery + local enrichment and heuristic scoring  (OpenAI)
    4. AI tenant scoring  (OpenAI, only when ``use_ai_scoring`` is set)

A stage failure is recorded under its key in ``errors`` and the run
continues; tenant discovery always runs, with generic context standing in
for a failed stage 1 or 2. AI scoring falls back to the heuristic formulas
and never fails the run. Only an error escaping the stage handlers fails
the analysis, reported to the tracker and raised as ``AnalysisFailedError``.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from tenant_research.agents.building_config_agent import BuildingConfigAgent
from tenant_research.agents.market_trend_agent import MarketTrendAgent
from tenant_research.agents.tenant_discovery_agent import TenantDiscoveryAgent
from tenant_research.agents.tenant_scoring_agent import TenantScoringAgent
from tenant_research.domain.enums import AnalysisStage, ScoreSource
from tenant_research.domain.errors import AnalysisFailedError, PropertyValidationError
from tenant_research.domain.schemas import PromptConfig, PropertyData
from tenant_research.infra.ai_gateway import AIGateway
from tenant_research.services.ai_scoring import score_tenants_with_ai
from tenant_research.services.progress_tracker import (
    STEPS_WITH_AI_SCORING,
    STEPS_WITHOUT_AI_SCORING,
    ProgressTracker,
)
from tenant_research.services.tenant_discovery import rank_tenants

logger = logging.getLogger(__name__)

PROMPT_VERSION = "tenant_research_v2.0"
FOCUS_STRATEGY = "emerging_companies"

REQUIRED_PROPERTY_FIELDS = ("address", "type")

STAGE_ERROR_MESSAGES = {
    AnalysisStage.PROPERTY_ANALYSIS: "Error during building configuration analysis",
    AnalysisStage.MARKET_ANALYSIS: "Error during market trends analysis",
    AnalysisStage.TENANT_RANKING: "Error during tenant discovery",
    AnalysisStage.AI_SCORING: "AI scoring unavailable, algorithmic scores kept",
}

DEFAULT_DEMAND_INDICATORS = ["Industrial growth", "Logistics demand"]


def validate_property_data(property_data: Optional[PropertyData]) -> PropertyData:
    """Reject property data missing any required field.

    Raises:
        PropertyValidationError: listing the missing ``property_data.*`` fields.
    """
    if property_data is None:
        raise PropertyValidationError([f"property_data.{f}" for f in REQUIRED_PROPERTY_FIELDS])

    missing = [
        f"property_data.{name}"
        for name in REQUIRED_PROPERTY_FIELDS
        if not (getattr(property_data, name) or "").strip()
    ]
    if missing:
        raise PropertyValidationError(missing)
    return property_data


class AnalysisPipeline:
    """Runs one property analysis against a fixed config snapshot.

    Args:
        gateway: AI gateway shared by all stage agents.
        tracker: Progress registry used when ``run`` gets a session id.
        config: Discovery parameters for this run; never written.
    """

    def __init__(self, gateway: AIGateway, tracker: ProgressTracker, config: PromptConfig):
        self.tracker = tracker
        self.config = config
        self.building_agent = BuildingConfigAgent(gateway)
        self.market_agent = MarketTrendAgent(gateway)
        self.discovery_agent = TenantDiscoveryAgent(gateway)
        self.scoring_agent = TenantScoringAgent(gateway)

    async def run(self, property_data: PropertyData, session_id: Optional[str] = None) -> dict:
        """Validate, run every stage and return the result envelope.

        Raises:
            PropertyValidationError: before any session or network activity.
            AnalysisFailedError: an error escaped the stage handlers.
        """
        validate_property_data(property_data)

        if session_id:
            self.tracker.create_session(session_id, property_data.use_ai_scoring)

        logger.info(
            "Starting tenant research analysis: address=%s, session=%s, ai_scoring=%s",
            property_data.address,
            session_id,
            property_data.use_ai_scoring,
        )

        try:
            envelope = await self._run_stages(property_data, session_id)
        except Exception as e:
            logger.exception("Analysis failed for %s", property_data.address)
            if session_id:
                self.tracker.error_session(session_id, str(e))
            raise AnalysisFailedError(f"Analysis failed: {e}", session_id=session_id) from e

        if session_id:
            self.tracker.complete_session(session_id, envelope)

        logger.info(
            "Analysis completed for %s: tenants=%d, errors=%d",
            property_data.address,
            len(envelope["tenant_ranking"]),
            len(envelope["errors"]),
        )
        return envelope

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def _report(self, session_id: Optional[str], step: int, task: str, details: str) -> None:
        if session_id:
            self.tracker.update_progress(session_id, step, task, details)

    def _record_error(self, errors: dict, stage: AnalysisStage, detail: Optional[str]) -> None:
        logger.error("Stage %s failed: %s", stage.value, detail)
        errors[stage.value] = STAGE_ERROR_MESSAGES[stage]

    async def _run_stages(self, property_data: PropertyData, session_id: Optional[str]) -> dict:
        errors: dict[str, str] = {}
        property_dict = property_data.model_dump()

        # Step 1: building configuration
        self._report(
            session_id, 1, "Building configuration analysis",
            "Using the Gemini API to analyze property characteristics...",
        )
        building_result = await self.building_agent.analyze(property_data)
        property_analysis = building_result.data if building_result.ok else None
        if not building_result.ok:
            self._record_error(errors, AnalysisStage.PROPERTY_ANALYSIS, building_result.error)

        # Step 2: area growth trends
        self._report(
            session_id, 2, "Growth trends analysis",
            "Using the OpenAI API to analyze the local market and economic trends...",
        )
        market_result = await self.market_agent.analyze(property_data.address)
        market_analysis = market_result.data if market_result.ok else None
        if not market_result.ok:
            self._record_error(errors, AnalysisStage.MARKET_ANALYSIS, market_result.error)

        # Step 3: tenant discovery, runs even when 1 or 2 failed
        self._report(
            session_id, 3, "Emerging tenant search",
            "Using the OpenAI API to discover emerging businesses...",
        )
        tenants: list[dict] = []
        discovery_result = await self.discovery_agent.discover(
            property_data, property_analysis, market_analysis, self.config
        )
        if discovery_result.ok:
            try:
                tenants = rank_tenants(
                    discovery_result.data, property_dict, market_analysis, self.config.result_count
                )
            except Exception as e:
                self._record_error(errors, AnalysisStage.TENANT_RANKING, str(e))
                tenants = []
        else:
            self._record_error(errors, AnalysisStage.TENANT_RANKING, discovery_result.error)

        # Step 4: optional AI scoring
        if property_data.use_ai_scoring:
            self._report(
                session_id, 4, "AI tenant scoring",
                "Generating advanced scores using artificial intelligence...",
            )
            if tenants:
                try:
                    tenants, source = await score_tenants_with_ai(
                        self.scoring_agent, tenants, property_data, market_analysis
                    )
                except Exception as e:
                    # heuristic ranking from stage 3 stands
                    self._record_error(errors, AnalysisStage.AI_SCORING, str(e))
                else:
                    if source == ScoreSource.ALGORITHMIC_FALLBACK:
                        errors[AnalysisStage.AI_SCORING.value] = STAGE_ERROR_MESSAGES[
                            AnalysisStage.AI_SCORING
                        ]
            else:
                logger.info("No tenants to score, skipping AI scoring")

        return self._build_envelope(property_data, property_analysis, market_analysis, tenants, errors)

    # ------------------------------------------------------------------
    # Envelope
    # ------------------------------------------------------------------

    def _build_envelope(
        self,
        property_data: PropertyData,
        property_analysis: Optional[dict],
        market_analysis: Optional[dict],
        tenants: list[dict],
        errors: dict,
    ) -> dict:
        building = property_analysis or {}
        market = market_analysis or {}
        features = building.get("property_features") or []

        return {
            "property_analysis": {
                "configuration": building.get("configuration"),
                "market_fit": building.get("market_fit") or "Property suited to industrial needs",
                "key_features": ", ".join(features) or "Standard industrial features",
                "property_features": features,
                "brief_property_info": building.get("brief_property_info") or "",
                "technical_specs": building.get("technical_specs") or {},
                "target_use_types": building.get("target_use_types") or [],
            },
            "market_context": {
                "local_trends": market.get("local_trends") or market.get("area_growth_trends"),
                "industry_growth": market.get("industry_growth") or market.get("national_industry_trend"),
                "area_growth_score": market.get("area_growth_score") or 7,
                "demand_indicators": market.get("demand_indicators") or list(DEFAULT_DEMAND_INDICATORS),
                "area_growth_trends": market.get("area_growth_trends"),
                "national_industry_trend": market.get("national_industry_trend"),
                "booming_industry": market.get("booming_industry"),
                "recent_real_estate_news": market.get("recent_real_estate_news"),
                "competitive_factors": market.get("competitive_factors") or [],
            },
            "tenant_ranking": tenants,
            "errors": dict(errors),
            "metadata": {
                "analysis_date": datetime.now(timezone.utc).isoformat(),
                "prompt_version": PROMPT_VERSION,
                "focus_strategy": FOCUS_STRATEGY,
                "ai_scoring_enabled": property_data.use_ai_scoring,
                "total_steps": (
                    STEPS_WITH_AI_SCORING if property_data.use_ai_scoring else STEPS_WITHOUT_AI_SCORING
                ),
                "total_candidates_analyzed": len(tenants),
                "tenants_with_ai_scoring": sum(
                    1 for t in tenants if t.get("score_source") == ScoreSource.AI.value
                ),
                "ranking_criteria": list(self.config.ranking_criteria),
                "errors": sorted(errors),
            },
        }
