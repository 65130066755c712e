"""Retrieval exceptions for docqa."""

from .base import DocQAError


class RetrievalError(DocQAError):
    """Error during context retrieval."""

    error_code = "DQA_RET_001"


class NoContextError(RetrievalError):
    """Answer generation was requested without any context."""

    error_code = "DQA_RET_002"
