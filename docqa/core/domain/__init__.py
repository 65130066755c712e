"""Domain models for docqa.

- document: VectorRecord and SearchMatch exchanged with the vector store
- requests: validated IndexDocumentRequest and AnswerQuestionRequest
- results: IndexResult and AnswerResult returned by the pipeline

All models are re-exported here:

    from docqa.core.domain import VectorRecord, SearchMatch
"""

from .document import SearchMatch, VectorRecord
from .requests import AnswerQuestionRequest, IndexDocumentRequest
from .results import AnswerResult, IndexResult

__all__ = [
    # Vector store models
    "VectorRecord",
    "SearchMatch",
    # Requests
    "IndexDocumentRequest",
    "AnswerQuestionRequest",
    # Results
    "IndexResult",
    "AnswerResult",
]
