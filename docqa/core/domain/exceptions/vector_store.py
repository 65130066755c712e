"""Vector store exceptions for docqa."""

from .base import DocQAError


class VectorStoreError(DocQAError):
    """Base error for vector store operations."""

    error_code = "DQA_VEC_001"


class VectorStoreConnectionError(VectorStoreError):
    """Failed to connect to the vector store.

    Common causes:
    - Invalid URL or API key
    - Network connectivity issues
    - Qdrant service is down
    """

    error_code = "DQA_VEC_002"


class IndexNotFoundError(VectorStoreError):
    """Configured index (collection) does not exist."""

    error_code = "DQA_VEC_003"
