"""Health check endpoints."""

import logging
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from .....config.settings import Settings
from .....core.domain.exceptions import DocQAError
from .....core.services.pipeline_service import PipelineService
from ..deps import get_pipeline, get_settings
from ..models import ErrorResponse, HealthResponse, ReadinessResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check(settings: Annotated[Settings, Depends(get_settings)]) -> HealthResponse:
    """Liveness check; does not touch external services."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(UTC).isoformat(),
        environment=settings.environment,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"model": ErrorResponse, "description": "Vector store unavailable"}},
)
def readiness_check(
    pipeline: Annotated[PipelineService, Depends(get_pipeline)],
) -> ReadinessResponse | JSONResponse:
    """Readiness check: confirms that the vector index is reachable."""
    try:
        stats = pipeline.vector_store.get_collection_stats()
    except DocQAError as e:
        logger.warning("Readiness check failed: %s", e.message)
        return JSONResponse(
            status_code=503,
            content=ErrorResponse(error="Vector store unavailable").model_dump(
                by_alias=True, exclude_none=True
            ),
        )

    return ReadinessResponse(
        status="ready",
        index=stats["index"],
        vector_count=stats["count"],
        dimension=stats["dimension"],
    )
