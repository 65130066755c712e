"""Configuration-related exceptions for docqa."""

from .base import DocQAError


class ConfigurationError(DocQAError):
    """Configuration or environment variable errors.

    Raised when required configuration is missing or invalid.
    """

    error_code = "DQA_CFG_001"


class MissingAPIKeyError(ConfigurationError):
    """Required API key or endpoint is not configured."""

    error_code = "DQA_CFG_002"


class InvalidChunkConfigError(ConfigurationError):
    """Chunk size and overlap do not form a valid splitter configuration."""

    error_code = "DQA_CFG_003"


class DimensionMismatchError(ConfigurationError):
    """Vector length does not match the index dimensionality.

    Common causes:
    - Embedding model or output dimensionality changed after the index was created
    - Index created by another application with a different model
    """

    error_code = "DQA_CFG_004"
