"""
Debt Communication Assistant - FastAPI Application

Main entry point for the service providing:
- Collection message generation
- Plain-text message download
- Per-user message template library
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.api.errors import DebtCommBaseError, ErrorCode, ErrorResponse
from src.api.middleware import REQUEST_ID_HEADER, RequestIDMiddleware, get_request_id
from src.api.rate_limit import limiter
from src.api.routes import generate, health, templates
from src.config.settings import settings
from src.db.database import get_session_factory

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("=" * 60)
    logger.info("Starting Debt Communication Assistant")
    logger.info("=" * 60)
    logger.info(f"LLM provider: {settings.llm_provider}")
    logger.info(f"Port: {settings.api_port}")
    logger.info(f"Debug: {settings.debug}")
    if get_session_factory() is None:
        logger.warning("Template store unavailable - template reads will be empty, saves will fail")
    yield


app = FastAPI(
    title="Debt Communication Assistant",
    description="LLM-drafted debt collection messages and a per-user template library",
    version="0.1.0",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Request ID middleware (must be added first to capture all requests)
app.add_middleware(RequestIDMiddleware)

cors_origins = settings.get_cors_origins()
if cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.info(f"CORS enabled for origins: {cors_origins}")
else:
    logger.warning("CORS disabled - no origins configured and not in debug mode")


def _request_id(request: Request) -> Optional[str]:
    """Current request ID; falls back to request state once the middleware has unwound."""
    return get_request_id() or getattr(request.state, "request_id", None)


@app.exception_handler(DebtCommBaseError)
async def debtcomm_error_handler(request: Request, exc: DebtCommBaseError) -> JSONResponse:
    """Handle all service exceptions with structured response."""
    error_response = ErrorResponse(
        error=exc.message,
        error_code=exc.error_code,
        details=exc.details,
        request_id=_request_id(request),
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response.model_dump(mode="json"),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject malformed input before it reaches generation or the template store."""
    error_response = ErrorResponse(
        error="Invalid request",
        error_code=ErrorCode.VALIDATION_ERROR,
        details={"errors": jsonable_encoder(exc.errors())},
        request_id=_request_id(request),
    )
    return JSONResponse(
        status_code=422,
        content=error_response.model_dump(mode="json"),
    )


@app.exception_handler(Exception)
async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions with structured response."""
    logger.exception(f"Unhandled exception: {exc}")
    request_id = _request_id(request)
    error_response = ErrorResponse(
        error="An unexpected error occurred",
        error_code=ErrorCode.INTERNAL_ERROR,
        details={"exception_type": type(exc).__name__} if settings.debug else None,
        request_id=request_id,
    )
    return JSONResponse(
        status_code=500,
        content=error_response.model_dump(mode="json"),
        headers={REQUEST_ID_HEADER: request_id} if request_id else None,
    )


# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(generate.router, tags=["Generation"])
app.include_router(templates.router, tags=["Templates"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app", host=settings.api_host, port=settings.api_port, reload=settings.debug
    )
