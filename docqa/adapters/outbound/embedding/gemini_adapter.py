"""Gemini embedding adapter implementing the embedding port."""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from google import genai

from ....core.domain.exceptions import EmbeddingProviderError
from ....core.ports.embedding_port import EmbeddingPort

logger = logging.getLogger(__name__)

# Gemini accepts at most 100 texts per embed_content request
EMBEDDING_BATCH_SIZE = 100


class GeminiEmbeddingAdapter(EmbeddingPort):
    """Embeds text with the Google Gemini API (google-genai SDK).

    Failures are surfaced as EmbeddingProviderError and never retried here.
    """

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-embedding-001",
        output_dimensionality: int | None = 768,
        batch_size: int = EMBEDDING_BATCH_SIZE,
    ) -> None:
        self.api_key = api_key
        self.model_name = model_name
        self.output_dimensionality = output_dimensionality
        self.batch_size = batch_size
        self._client: "genai.Client | None" = None

    def _get_client(self) -> "genai.Client":
        """Get or create the genai client."""
        if self._client is None:
            from google import genai

            self._client = genai.Client(api_key=self.api_key)
            logger.info("Gemini embedding client initialized for model: %s", self.model_name)
        return self._client

    def embed_query(self, text: str) -> list[float]:
        """Generate the embedding for a single query text."""
        return self._embed([text], task_type="RETRIEVAL_QUERY")[0]

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for document chunks, in input order."""
        return self._embed(texts, task_type="RETRIEVAL_DOCUMENT")

    def _embed(self, texts: list[str], task_type: str) -> list[list[float]]:
        if not texts:
            raise EmbeddingProviderError("No texts provided for embedding")
        if any(not text for text in texts):
            raise EmbeddingProviderError(
                "Cannot embed empty text",
                context={"empty_positions": [i for i, text in enumerate(texts) if not text]},
            )

        vectors: list[list[float]] = []
        for start in range(0, len(texts), self.batch_size):
            batch = texts[start : start + self.batch_size]
            vectors.extend(self._embed_batch(batch, task_type, start))

        self._check_vectors(vectors, expected=len(texts))
        return vectors

    def _embed_batch(self, batch: list[str], task_type: str, offset: int) -> list[list[float]]:
        config: dict[str, object] = {"task_type": task_type}
        if self.output_dimensionality:
            config["output_dimensionality"] = self.output_dimensionality

        try:
            result = self._get_client().models.embed_content(
                model=self.model_name,
                contents=batch,
                config=config,
            )
        except Exception as e:
            raise EmbeddingProviderError(
                f"Embedding request failed: {e}",
                cause=e,
                context={"model": self.model_name, "batch_offset": offset, "size": len(batch)},
            ) from e

        embeddings = getattr(result, "embeddings", None) or []
        return [list(embedding.values or []) for embedding in embeddings]

    def _check_vectors(self, vectors: list[list[float]], expected: int) -> None:
        context = {"model": self.model_name, "expected": expected, "received": len(vectors)}
        if not vectors:
            raise EmbeddingProviderError(
                "Failed to generate valid embeddings - empty vectors returned", context=context
            )
        if len(vectors) != expected:
            raise EmbeddingProviderError(
                "Embedding provider returned the wrong number of vectors", context=context
            )

        lengths = {len(vector) for vector in vectors}
        if 0 in lengths:
            raise EmbeddingProviderError(
                "Failed to generate valid embeddings - zero-length vector returned",
                context=context,
            )
        if len(lengths) > 1:
            raise EmbeddingProviderError(
                "Embedding provider returned vectors of different lengths",
                context={**context, "lengths": sorted(lengths)},
            )
