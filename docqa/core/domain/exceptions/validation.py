"""Validation exceptions for docqa."""

from .base import DocQAError


class ValidationError(DocQAError):
    """Input validation failed."""

    error_code = "DQA_VAL_001"


class MissingFieldError(ValidationError):
    """Required input field is missing or empty."""

    error_code = "DQA_VAL_002"


class InvalidFieldTypeError(ValidationError):
    """Input field has the wrong type."""

    error_code = "DQA_VAL_003"


class InputTooLongError(ValidationError):
    """Input exceeds maximum allowed length."""

    error_code = "DQA_VAL_004"
