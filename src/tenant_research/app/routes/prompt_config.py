"""Prompt configuration API routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from tenant_research.domain.schemas import PromptConfigUpdate
from tenant_research.services.prompt_config import PromptConfigStore, get_prompt_config_store

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/config", tags=["config"])


@router.get("/prompt")
async def get_prompt_config(store: PromptConfigStore = Depends(get_prompt_config_store)):
    return store.get().model_dump()


@router.post("/prompt")
async def update_prompt_config(
    body: PromptConfigUpdate,
    store: PromptConfigStore = Depends(get_prompt_config_store),
):
    """Partially update the discovery configuration (unset fields kept)."""
    try:
        config = store.replace(body)
    except ValidationError as exc:
        fields = sorted({str(err["loc"][0]) for err in exc.errors() if err.get("loc")})
        logger.warning("Rejected prompt config update: %s", fields)
        if "result_count" in fields:
            message = "result_count must be between 1 and 50"
        else:
            message = f"Invalid configuration fields: {', '.join(fields)}"
        raise HTTPException(status_code=400, detail={"error": message, "fields": fields})

    return {
        "status": "success",
        "message": "Prompt configuration updated",
        "config": config.model_dump(),
    }


@router.post("/prompt/reset")
async def reset_prompt_config(store: PromptConfigStore = Depends(get_prompt_config_store)):
    config = store.reset()
    return {
        "status": "success",
        "message": "Prompt configuration reset to defaults",
        "config": config.model_dump(),
    }
