"""Pipeline exceptions for docqa.

These wrap any failure of a pipeline step. ``message`` is safe to show to
clients; the internal error is kept in ``cause``.
"""

from typing import Any

from .base import DocQAError


class PipelineError(DocQAError):
    """A pipeline operation failed after input validation."""

    error_code = "DQA_PIP_001"

    def __init__(
        self,
        message: str,
        *,
        cause: Exception | None = None,
        context: dict[str, Any] | None = None,
        duration_ms: int = 0,
    ) -> None:
        super().__init__(message, cause=cause, context=context)
        self.duration_ms = duration_ms


class IndexingFailedError(PipelineError):
    """Indexing a document failed."""

    error_code = "DQA_PIP_002"


class AnswerFailedError(PipelineError):
    """Answering a question failed."""

    error_code = "DQA_PIP_003"
