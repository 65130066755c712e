"""Embedding exceptions for docqa."""

from .base import DocQAError


class EmbeddingError(DocQAError):
    """Failed to generate embeddings."""

    error_code = "DQA_EMB_001"


class EmbeddingProviderError(EmbeddingError):
    """Embedding provider call failed or returned unusable vectors."""

    error_code = "DQA_EMB_002"


class ChunkVectorMismatchError(EmbeddingError):
    """Number of vectors differs from the number of chunks."""

    error_code = "DQA_EMB_003"
