"""Pydantic models for API responses.

Field names are exposed in camelCase (``chunkCount``, ``chunksRetrieved``).
Request bodies are validated by the domain request objects instead of
pydantic so that each failure gets its own message.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base model serializing to camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class IndexDocumentResponse(ApiModel):
    """Response model for an indexed document."""

    success: bool = True
    message: str = Field(..., description="Human-readable summary")
    chunk_count: int = Field(..., description="Number of chunks created")
    record_count: int = Field(..., description="Number of records stored")
    duration: int = Field(..., description="Elapsed time in milliseconds")


class AnswerQuestionResponse(ApiModel):
    """Response model for an answered question.

    ``chunksRetrieved`` is 0 when nothing relevant was found; ``answer`` then
    says so.
    """

    success: bool = True
    answer: str = Field(..., description="The generated answer")
    chunks_retrieved: int = Field(..., description="Number of context chunks used")
    duration: int = Field(..., description="Elapsed time in milliseconds")


class ErrorResponse(ApiModel):
    """Response model for failed requests.

    Example:
        {"success": false, "error": "Failed to index document. Please try again.",
         "details": "Embedding request failed: ...", "duration": 412}
    """

    success: bool = False
    error: str = Field(..., description="Client-safe error message")
    details: str | None = Field(None, description="Internal cause (non-production only)")
    duration: int | None = Field(None, description="Elapsed time in milliseconds")


class HealthResponse(ApiModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status")
    timestamp: str = Field(..., description="Server time (ISO-8601)")
    environment: str = Field(..., description="Runtime mode")


class ReadinessResponse(ApiModel):
    """Response model for readiness check."""

    status: str = Field(..., description="Readiness status")
    index: str = Field(..., description="Vector index name")
    vector_count: int = Field(..., description="Number of stored records")
    dimension: int = Field(..., description="Vector dimensionality of the index")
