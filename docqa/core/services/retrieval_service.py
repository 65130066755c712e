"""Retrieves relevant chunk texts for a question."""

import logging

from ..domain import SearchMatch
from ..ports.embedding_port import EmbeddingPort
from ..ports.vector_store_port import VectorStorePort

logger = logging.getLogger(__name__)


class RetrievalService:
    """Embeds a question and looks up the most similar stored chunks."""

    def __init__(
        self,
        embedder: EmbeddingPort,
        vector_store: VectorStorePort,
        top_k: int = 3,
    ) -> None:
        """Initialize the retriever.

        Args:
            embedder: Embedding provider used for the query vector.
            vector_store: Index holding the chunk records.
            top_k: Number of matches to request from the index.
        """
        self.embedder = embedder
        self.vector_store = vector_store
        self.top_k = top_k

    @staticmethod
    def _match_text(match: SearchMatch) -> str | None:
        text = match.metadata.get("text") if match.metadata else None
        if isinstance(text, str) and text:
            return text
        return None

    def retrieve(self, question: str) -> list[str]:
        """Return chunk texts relevant to ``question``, most relevant first.

        An empty list means nothing relevant is stored; it is not an error.
        """
        query_vector = self.embedder.embed_query(question)
        matches = self.vector_store.search(query_vector, top_k=self.top_k)

        texts = [text for text in map(self._match_text, matches) if text is not None]
        if len(texts) < len(matches):
            logger.debug("Dropped %d matches without text", len(matches) - len(texts))

        logger.info("Retrieved %d relevant chunks", len(texts))
        return texts
