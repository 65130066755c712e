"""
Pytest configuration and shared fixtures.
"""

import hashlib
from unittest.mock import MagicMock

import pytest

from docqa.adapters.outbound.vector_store.qdrant_adapter import QdrantAdapter
from docqa.config.settings import Settings
from docqa.core.ports.embedding_port import EmbeddingPort
from docqa.core.services.answer_service import AnswerService
from docqa.core.services.chunking import RecursiveTextSplitter
from docqa.core.services.ids import SequentialIdGenerator
from docqa.core.services.pipeline_service import PipelineService
from docqa.core.services.retrieval_service import RetrievalService

TEST_DIMENSION = 8


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line(
        "markers", "integration: Integration tests (HTTP app with mocked providers)"
    )


class HashingEmbedder(EmbeddingPort):
    """Deterministic embedder: equal texts get equal vectors.

    The first component is always 1.0 so no vector is all zeros.
    """

    def __init__(self, dimension: int = TEST_DIMENSION) -> None:
        self.dimension = dimension
        self.calls: list[list[str]] = []

    def _vector(self, text: str) -> list[float]:
        digest = hashlib.md5(text.encode("utf-8")).digest()
        return [1.0] + [digest[i % len(digest)] / 255.0 for i in range(self.dimension - 1)]

    def embed_query(self, text: str) -> list[float]:
        self.calls.append([text])
        return self._vector(text)

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        return [self._vector(text) for text in texts]


@pytest.fixture
def settings():
    """Settings isolated from the developer's .env file."""
    return Settings(
        _env_file=None,
        embedding_api_key="test-embedding-key",
        llm_api_key="test-llm-key",
        qdrant_location=":memory:",
        index_name="rag-example-768",
        environment="test",
        embedding_dimension=TEST_DIMENSION,
    )


@pytest.fixture
def embedder():
    return HashingEmbedder()


@pytest.fixture
def memory_store():
    """Qdrant adapter backed by qdrant-client's in-process mode."""
    from qdrant_client import QdrantClient

    return QdrantAdapter(
        collection_name="test-index",
        dimension=TEST_DIMENSION,
        client=QdrantClient(location=":memory:"),
    )


@pytest.fixture
def mock_llm():
    llm = MagicMock()
    llm.generate.return_value = "Paris is the capital of France [1]."
    return llm


@pytest.fixture
def pipeline(embedder, memory_store, mock_llm):
    """Full pipeline with a deterministic embedder, in-memory index and mock LLM."""
    return PipelineService(
        splitter=RecursiveTextSplitter(chunk_size=500, chunk_overlap=100),
        embedder=embedder,
        vector_store=memory_store,
        retriever=RetrievalService(embedder, memory_store, top_k=3),
        answer_service=AnswerService(mock_llm),
        id_generator=SequentialIdGenerator(),
    )


@pytest.fixture
def sample_document():
    """Three paragraphs of distinct facts."""
    return (
        "Paris is the capital of France. It lies on the Seine.\n\n"
        "Berlin is the capital of Germany. It has many museums.\n\n"
        "Madrid is the capital of Spain. It sits on a high plateau."
    )
