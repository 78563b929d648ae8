"""FastAPI application for the plan-qa API."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .... import __version__
from ....config.logging import setup_logging
from ....config.settings import settings
from ....core.domain.exceptions import ErrorKind, PlanQAError
from ...common.exception_handler import (
    format_exception_json,
    get_http_status_code,
    log_exception,
)
from .routers import chat, health, uploads

setup_logging(settings.log_level, json_format=settings.log_json)
logger = logging.getLogger(__name__)

# Debug mode adds stack traces to error responses
DEBUG_MODE = settings.debug

app = FastAPI(
    title="plan-qa API",
    description=(
        "Ask questions about uploaded PDF documents. Answers are grounded in the "
        "most relevant passages and cite source file and page."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(chat.router)
app.include_router(uploads.router)


# =============================================================================
# Global Exception Handlers
# =============================================================================


@app.exception_handler(PlanQAError)
async def plan_qa_error_handler(request: Request, exc: PlanQAError) -> JSONResponse:
    """Render application errors with the status their kind maps to."""
    log_exception(exc, extra_context={"path": str(request.url.path), "method": request.method})

    return JSONResponse(
        status_code=get_http_status_code(exc),
        content=exc.to_dict(include_trace=DEBUG_MODE),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed request bodies are bad input (400), not 422."""
    errors = exc.errors()
    message = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', '')}"
        for error in errors
    )
    logger.warning("Rejected request to %s: %s", request.url.path, message)

    return JSONResponse(
        status_code=400,
        content={
            "error": {
                "type": "RequestValidationError",
                "code": "PQA_VAL_000",
                "kind": ErrorKind.INVALID_INPUT.value,
                "message": message or "Invalid request",
            },
            "context": {"path": str(request.url.path)},
        },
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render unhandled exceptions in the same structure."""
    log_exception(exc, extra_context={"path": str(request.url.path), "method": request.method})

    return JSONResponse(
        status_code=get_http_status_code(exc),
        content=format_exception_json(exc, include_trace=DEBUG_MODE),
    )


# =============================================================================
# Lifecycle Events
# =============================================================================


@app.on_event("startup")
async def startup_event():
    """Prepare the uploads directory on startup."""
    settings.ensure_directories()
    logger.info("plan-qa API starting up (uploads: %s)", settings.uploads_dir)
    logger.info("Debug mode: %s", "ENABLED" if DEBUG_MODE else "DISABLED")
    if not settings.is_configured:
        logger.warning("GOOGLE_API_KEY is not set; /api/v1/ask will fail until it is")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("plan-qa API shutting down...")


# Export for uvicorn
__all__ = ["app"]
