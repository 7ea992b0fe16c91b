"""FastAPI application entry point for the Tenant Research API."""

import asyncio
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tenant_research.app.config import get_settings
from tenant_research.domain.errors import TenantResearchError
from tenant_research.services.progress_tracker import get_progress_tracker, session_sweep_loop

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: start the progress-session sweep."""
    settings = get_settings()
    sweep_task = asyncio.create_task(
        session_sweep_loop(get_progress_tracker(), settings.session_sweep_interval_seconds)
    )
    yield
    sweep_task.cancel()


settings = get_settings()

# Configure logging
logging.basicConfig(
    level=logging.INFO if settings.debug else logging.WARNING,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)

app = FastAPI(
    title="Tenant Research API",
    lifespan=lifespan,
    debug=settings.debug,
)

# CORS middleware: "*" in debug mode disables credentials
_cors_origins = settings.cors_origins_list
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=("*" not in _cors_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TenantResearchError)
async def tenant_research_error_handler(request: Request, exc: TenantResearchError):
    logger.error("Unhandled %s on %s: %s", type(exc).__name__, request.url.path, exc)
    return JSONResponse(
        status_code=500,
        content={"error": type(exc).__name__, "message": str(exc)},
    )


# ---------------------------------------------------------------------------
# Route includes
# ---------------------------------------------------------------------------
from tenant_research.app.routes.tenant_research import router as tenant_research_router
from tenant_research.app.routes.prompt_config import router as prompt_config_router
from tenant_research.app.routes.demographics import router as demographics_router
from tenant_research.app.routes.building_rate import router as building_rate_router
from tenant_research.app.routes.industrial import router as industrial_router
from tenant_research.app.routes.market_research import router as market_research_router

app.include_router(tenant_research_router)
app.include_router(prompt_config_router)
app.include_router(demographics_router)
app.include_router(building_rate_router)
app.include_router(industrial_router)
app.include_router(market_research_router)


@app.get("/health", tags=["health"])
async def health_check():
    """Return service health status."""
    return {"status": "ok", "service": "tenant-research"}


def run() -> None:
    """Run the application with uvicorn (used by project.scripts entry point)."""
    uvicorn.run(
        "tenant_research.app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
