"""Tenant research API routes: run an analysis and poll its progress."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException

from tenant_research.domain.errors import (
    AnalysisFailedError,
    PropertyValidationError,
    SessionNotFoundError,
)
from tenant_research.domain.schemas import AnalyzeRequest
from tenant_research.infra.ai_gateway import AIGateway, get_ai_gateway
from tenant_research.services.analysis_pipeline import PROMPT_VERSION, AnalysisPipeline
from tenant_research.services.progress_tracker import ProgressTracker, get_progress_tracker
from tenant_research.services.prompt_config import PromptConfigStore, get_prompt_config_store

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/tenant-research", tags=["tenant-research"])


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.post("/analyze")
async def analyze_property(
    body: AnalyzeRequest,
    gateway: AIGateway = Depends(get_ai_gateway),
    tracker: ProgressTracker = Depends(get_progress_tracker),
    config_store: PromptConfigStore = Depends(get_prompt_config_store),
):
    """Run a full tenant research analysis.

    When ``with_progress`` is set together with a client-generated
    ``session_id``, stage progress can be polled at ``/progress/{session_id}``
    while the request is in flight.
    """
    session_id = body.session_id if body.with_progress and body.session_id else None
    pipeline = AnalysisPipeline(gateway, tracker, config_store.get())

    try:
        envelope = await pipeline.run(body.property_data, session_id=session_id)
    except PropertyValidationError as exc:
        raise HTTPException(
            status_code=400,
            detail={
                "error": "Missing required fields",
                "required": exc.missing_fields,
            },
        )
    except AnalysisFailedError as exc:
        raise HTTPException(
            status_code=500,
            detail={
                "error": "Analysis failed",
                "message": str(exc),
                "session_id": exc.session_id,
            },
        )

    return {
        "success": True,
        "data": envelope,
        "timestamp": _timestamp(),
        "version": PROMPT_VERSION,
        "session_id": session_id,
    }


@router.get("/progress")
async def progress_stats(tracker: ProgressTracker = Depends(get_progress_tracker)):
    """Active session count and ids."""
    return {"success": True, "stats": tracker.get_stats(), "timestamp": _timestamp()}


@router.get("/progress/{session_id}")
async def get_progress(session_id: str, tracker: ProgressTracker = Depends(get_progress_tracker)):
    """Current progress snapshot for a session (polling)."""
    try:
        progress = tracker.require_progress(session_id)
    except SessionNotFoundError:
        raise HTTPException(
            status_code=404,
            detail={"error": "Session not found", "session_id": session_id},
        )

    return {
        "success": True,
        "progress": progress,
        "session_id": session_id,
        "timestamp": _timestamp(),
    }
