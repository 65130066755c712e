"""Results of the pipeline operations."""

from dataclasses import dataclass


@dataclass(frozen=True)
class IndexResult:
    """Outcome of indexing one document."""

    message: str
    chunk_count: int
    record_count: int
    duration_ms: int


@dataclass(frozen=True)
class AnswerResult:
    """Outcome of answering one question.

    ``found`` is False when retrieval returned no usable chunks; ``answer``
    then holds the canned not-found message and ``chunks_retrieved`` is 0.
    """

    answer: str
    chunks_retrieved: int
    duration_ms: int
    found: bool = True
