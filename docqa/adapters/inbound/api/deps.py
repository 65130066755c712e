"""FastAPI dependency injection for docqa."""

import logging

from fastapi import Request

from ....composition.container import build_pipeline
from ....config.settings import Settings
from ....core.services.pipeline_service import PipelineService

logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_pipeline(request: Request) -> PipelineService:
    """Get or lazily create the application's PipelineService.

    Handlers run in the threadpool, so creation is guarded by the app's
    ``pipeline_lock`` and happens at most once.
    """
    state = request.app.state
    pipeline = state.pipeline
    if pipeline is None:
        with state.pipeline_lock:
            pipeline = state.pipeline
            if pipeline is None:
                logger.info("Initializing PipelineService...")
                pipeline = build_pipeline(state.settings)
                state.pipeline = pipeline
    return pipeline
