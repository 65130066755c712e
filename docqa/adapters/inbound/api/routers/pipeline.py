"""Endpoints for indexing documents and answering questions."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends

from .....config.settings import Settings
from .....core.domain import AnswerQuestionRequest, IndexDocumentRequest
from .....core.services.pipeline_service import PipelineService
from ..deps import get_pipeline, get_settings
from ..models import AnswerQuestionResponse, ErrorResponse, IndexDocumentResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["pipeline"])

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    500: {"model": ErrorResponse, "description": "Internal server error"},
}

Payload = Annotated[dict[str, Any] | None, Body()]


@router.post("/index-document", response_model=IndexDocumentResponse, responses=ERROR_RESPONSES)
def index_document(
    settings: Annotated[Settings, Depends(get_settings)],
    pipeline: Annotated[PipelineService, Depends(get_pipeline)],
    payload: Payload = None,
) -> IndexDocumentResponse:
    """Chunk, embed and store a document.

    Body: ``{"documentText": "..."}``, at most 500,000 characters by default.
    """
    request = IndexDocumentRequest.from_payload(payload, max_length=settings.max_document_length)
    result = pipeline.index_document(request)

    return IndexDocumentResponse(
        message=result.message,
        chunk_count=result.chunk_count,
        record_count=result.record_count,
        duration=result.duration_ms,
    )


@router.post("/answer-question", response_model=AnswerQuestionResponse, responses=ERROR_RESPONSES)
def answer_question(
    settings: Annotated[Settings, Depends(get_settings)],
    pipeline: Annotated[PipelineService, Depends(get_pipeline)],
    payload: Payload = None,
) -> AnswerQuestionResponse:
    """Answer a question from the indexed documents.

    Body: ``{"question": "..."}``, at most 1,000 characters by default.
    """
    request = AnswerQuestionRequest.from_payload(payload, max_length=settings.max_question_length)
    result = pipeline.answer_question(request)

    return AnswerQuestionResponse(
        answer=result.answer,
        chunks_retrieved=result.chunks_retrieved,
        duration=result.duration_ms,
    )
