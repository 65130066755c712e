"""Validated request objects for the pipeline operations.

Raw request bodies are checked exactly once, here, and turned into typed
requests. The checks run in a fixed order and the first failure wins:
presence, type, length.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .exceptions import InputTooLongError, InvalidFieldTypeError, MissingFieldError

MAX_DOCUMENT_LENGTH = 500_000
MAX_QUESTION_LENGTH = 1_000


def _is_missing(value: Any) -> bool:
    """Absent, null, empty string, ``false`` or zero; empty lists and objects count as present."""
    if value is None or value is False or value == "":
        return True
    return isinstance(value, int | float) and not isinstance(value, bool) and value == 0


def _require_text(value: Any, label: str, max_length: int, field_name: str) -> str:
    context = {"field": field_name}
    if _is_missing(value):
        raise MissingFieldError(f"{label} is required.", context=context)
    if not isinstance(value, str):
        raise InvalidFieldTypeError(
            f"{label} must be a string.",
            context={**context, "type": type(value).__name__},
        )
    if len(value) > max_length:
        raise InputTooLongError(
            f"{label} exceeds maximum length of {max_length:,} characters.",
            context={**context, "length": len(value), "max_length": max_length},
        )
    return value


@dataclass(frozen=True)
class IndexDocumentRequest:
    """A document that passed validation and may be indexed."""

    document_text: str

    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, Any] | None,
        max_length: int = MAX_DOCUMENT_LENGTH,
    ) -> "IndexDocumentRequest":
        """Validate a raw ``{"documentText": ...}`` body.

        Raises:
            MissingFieldError: Text is absent or empty.
            InvalidFieldTypeError: Text is not a string.
            InputTooLongError: Text is longer than ``max_length``.
        """
        value = (payload or {}).get("documentText")
        return cls(_require_text(value, "Document text", max_length, "documentText"))


@dataclass(frozen=True)
class AnswerQuestionRequest:
    """A question that passed validation and may be answered."""

    question: str

    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, Any] | None,
        max_length: int = MAX_QUESTION_LENGTH,
    ) -> "AnswerQuestionRequest":
        """Validate a raw ``{"question": ...}`` body.

        Raises:
            MissingFieldError: Question is absent or empty.
            InvalidFieldTypeError: Question is not a string.
            InputTooLongError: Question is longer than ``max_length``.
        """
        value = (payload or {}).get("question")
        return cls(_require_text(value, "Question", max_length, "question"))
