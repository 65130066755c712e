"""Chunking exceptions for docqa."""

from .base import DocQAError


class ChunkingError(DocQAError):
    """Error while splitting a document into chunks."""

    error_code = "DQA_CHK_001"


class EmptyInputError(ChunkingError):
    """Splitting produced no chunks."""

    error_code = "DQA_CHK_002"
