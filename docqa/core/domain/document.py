"""Record and search match models for the vector store."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class VectorRecord:
    """A chunk embedding ready to be written to the vector store.

    Attributes:
        id: Unique record identifier. Upserting an existing id overwrites it.
        values: The embedding vector.
        metadata: Payload stored alongside the vector (``text`` and ``timestamp``).
    """

    id: str
    values: list[float]
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return str(self.metadata.get("text", ""))


@dataclass
class SearchMatch:
    """A similarity search hit.

    Attributes:
        id: Identifier of the matched record.
        metadata: The stored payload of the record.
        score: Similarity score (higher is more similar).
    """

    id: str
    metadata: dict[str, Any]
    score: float
