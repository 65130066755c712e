"""LLM exceptions for docqa."""

from .base import DocQAError


class LLMError(DocQAError):
    """Base error for LLM operations."""

    error_code = "DQA_LLM_001"


class LLMProviderError(LLMError):
    """Language model call failed.

    Common causes:
    - Invalid API key
    - Quota exhausted
    - Response blocked by safety settings
    """

    error_code = "DQA_LLM_002"
