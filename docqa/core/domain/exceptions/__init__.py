"""Custom exception hierarchy for docqa.

Each exception includes:
- Error codes for quick identification
- Automatic capture of class, method, file, and line number
- Cause chaining for underlying exceptions
- Dictionary form for structured logging

Import from this package directly:

    from docqa.core.domain.exceptions import DocQAError, VectorStoreError
"""

# Base classes
from .base import DocQAError, ExceptionContext

# Chunking exceptions
from .chunking import ChunkingError, EmptyInputError

# Configuration exceptions
from .configuration import (
    ConfigurationError,
    DimensionMismatchError,
    InvalidChunkConfigError,
    MissingAPIKeyError,
)

# Embedding exceptions
from .embedding import (
    ChunkVectorMismatchError,
    EmbeddingError,
    EmbeddingProviderError,
)

# LLM exceptions
from .llm import LLMError, LLMProviderError

# Pipeline exceptions
from .pipeline import AnswerFailedError, IndexingFailedError, PipelineError

# Retrieval exceptions
from .retrieval import NoContextError, RetrievalError

# Validation exceptions
from .validation import (
    InputTooLongError,
    InvalidFieldTypeError,
    MissingFieldError,
    ValidationError,
)

# Vector store exceptions
from .vector_store import (
    IndexNotFoundError,
    VectorStoreConnectionError,
    VectorStoreError,
)

__all__ = [
    # Base
    "ExceptionContext",
    "DocQAError",
    # Configuration
    "ConfigurationError",
    "MissingAPIKeyError",
    "InvalidChunkConfigError",
    "DimensionMismatchError",
    # Validation
    "ValidationError",
    "MissingFieldError",
    "InvalidFieldTypeError",
    "InputTooLongError",
    # Chunking
    "ChunkingError",
    "EmptyInputError",
    # Embedding
    "EmbeddingError",
    "EmbeddingProviderError",
    "ChunkVectorMismatchError",
    # Vector Store
    "VectorStoreError",
    "VectorStoreConnectionError",
    "IndexNotFoundError",
    # LLM
    "LLMError",
    "LLMProviderError",
    # Retrieval
    "RetrievalError",
    "NoContextError",
    # Pipeline
    "PipelineError",
    "IndexingFailedError",
    "AnswerFailedError",
]
