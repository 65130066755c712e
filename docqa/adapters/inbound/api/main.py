"""FastAPI application for docqa."""

import logging
import threading
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ....composition.container import build_pipeline
from ....config.logging import setup_logging
from ....config.settings import Settings, get_settings
from ....core.domain.exceptions import (
    ConfigurationError,
    DocQAError,
    PipelineError,
    ValidationError,
)
from ....core.services.pipeline_service import PipelineService
from ...common.exception_handler import describe_cause, get_http_status_code, log_exception
from .models import ErrorResponse
from .routers import health, pipeline

logger = logging.getLogger(__name__)


def _error_response(
    status_code: int,
    error: str,
    details: str | None = None,
    duration: int | None = None,
) -> JSONResponse:
    body = ErrorResponse(error=error, details=details, duration=duration)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


def create_app(
    settings: Settings | None = None,
    pipeline_service: PipelineService | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Application settings; loaded from the environment when omitted.
        pipeline_service: Pre-built pipeline; built from settings at startup when omitted.

    Returns:
        Configured FastAPI app.
    """
    settings = settings or get_settings()
    show_details = not settings.is_production

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("=" * 60)
        logger.info("RAG backend server starting up...")
        logger.info("Environment: %s", settings.environment)
        logger.info("Server URL: http://localhost:%d", settings.port)
        logger.info("Health check: http://localhost:%d/health", settings.port)
        logger.info("Vector index: %s", settings.index_name)
        logger.info("=" * 60)

        if app.state.pipeline is None:
            try:
                app.state.pipeline = build_pipeline(settings)
            except ConfigurationError as e:
                # /health stays up; pipeline routes retry the build per request
                logger.warning("Pipeline not built at startup: %s", e.message)
        yield
        logger.info("RAG backend server shutting down...")

    app = FastAPI(
        title="docqa API",
        description=(
            "Retrieval-augmented question answering: index text documents and "
            "answer questions grounded in them."
        ),
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.pipeline = pipeline_service
    app.state.pipeline_lock = threading.Lock()

    # Any origin outside production, the configured list in production
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins if settings.is_production else ["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = int((time.perf_counter() - start_time) * 1000)
        logger.info(
            "%s %s -> %d (%dms)",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return response

    app.include_router(health.router)
    app.include_router(pipeline.router)

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.message)
        return _error_response(400, exc.message)

    @app.exception_handler(PipelineError)
    async def pipeline_error_handler(request: Request, exc: PipelineError) -> JSONResponse:
        # Already logged with its cause by the pipeline service
        return _error_response(
            get_http_status_code(exc),
            exc.message,
            details=describe_cause(exc) if show_details else None,
            duration=exc.duration_ms,
        )

    @app.exception_handler(DocQAError)
    async def docqa_error_handler(request: Request, exc: DocQAError) -> JSONResponse:
        log_exception(exc, extra_context={"path": request.url.path, "method": request.method})
        return _error_response(
            get_http_status_code(exc),
            "Internal server error",
            details=exc.message if show_details else None,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning("Malformed body on %s: %s", request.url.path, exc.errors())
        return _error_response(400, "Request body must be a JSON object.")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == 404:
            return _error_response(404, "Endpoint not found")
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        log_exception(exc, extra_context={"path": request.url.path, "method": request.method})
        return _error_response(
            500,
            "Internal server error",
            details=str(exc) if show_details else None,
        )

    return app


def build_default_app() -> FastAPI:
    """Application factory used by uvicorn (``--factory``) and the CLI."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file, settings.log_json)
    return create_app(settings)
