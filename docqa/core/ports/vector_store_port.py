"""Vector Store Port Interface."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from ..domain import SearchMatch, VectorRecord


class VectorStorePort(ABC):
    """Abstract interface for a single named vector index."""

    @abstractmethod
    def upsert(self, records: Sequence[VectorRecord]) -> int:
        """Write records to the index and return how many were stored."""
        ...

    @abstractmethod
    def search(self, vector: list[float], top_k: int = 3) -> list[SearchMatch]:
        """Return up to ``top_k`` matches, most similar first."""
        ...

    @abstractmethod
    def get_collection_stats(self) -> dict[str, Any]:
        """Get statistics for the index."""
        ...

    def ensure_collection(self) -> None:
        """Make sure the index exists and matches the configured dimension."""
        return None
