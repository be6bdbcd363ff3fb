"""
Health check API endpoint.

GET /health - Check LLM provider and template store status.
"""
import time

from fastapi import APIRouter
from starlette.concurrency import run_in_threadpool

from src.api.models.responses import HealthResponse
from src.db.database import is_database_available
from src.llm.factory import llm_client

router = APIRouter()

VERSION = "0.1.0"

# Track service start time for uptime calculation
_start_time = time.time()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Health check endpoint.

    Returns:
        - status: healthy when the LLM answers, degraded otherwise
        - provider/model: configured LLM
        - model_available: whether the LLM is responding
        - database_available: whether the template store is connected
        - uptime_seconds: API uptime
    """
    uptime = time.time() - _start_time

    llm_health = await llm_client.health_check()
    model_available = llm_health.get("status") == "healthy"
    database_available = await run_in_threadpool(is_database_available)

    return HealthResponse(
        status="healthy" if model_available else "degraded",
        version=VERSION,
        provider=llm_client.provider_name,
        model=llm_client.model_name,
        model_available=model_available,
        database_available=database_available,
        uptime_seconds=round(uptime, 2),
    )
