"""Composition root wiring adapters to the pipeline service.

Every component is built from one Settings object; nothing below this module
reads configuration on its own.
"""

from __future__ import annotations

import logging

from ..adapters.outbound.embedding.gemini_adapter import GeminiEmbeddingAdapter
from ..adapters.outbound.llm.gemini_adapter import GeminiAdapter
from ..adapters.outbound.vector_store.qdrant_adapter import QdrantAdapter
from ..config.settings import Settings
from ..core.services.answer_service import AnswerService
from ..core.services.chunking import RecursiveTextSplitter
from ..core.services.ids import IdGenerator
from ..core.services.pipeline_service import PipelineService
from ..core.services.retrieval_service import RetrievalService

logger = logging.getLogger(__name__)


def build_vector_store(settings: Settings) -> QdrantAdapter:
    return QdrantAdapter(
        collection_name=settings.index_name,
        dimension=settings.embedding_dimension,
        url=settings.qdrant_url,
        api_key=settings.qdrant_api_key,
        location=settings.qdrant_location,
        batch_size=settings.upsert_batch_size,
        create_if_missing=settings.create_index_if_missing,
    )


def build_pipeline(settings: Settings, id_generator: IdGenerator | None = None) -> PipelineService:
    """Build the full pipeline from settings.

    Raises:
        MissingAPIKeyError: If a provider credential is not configured.
    """
    settings.validate_credentials()
    logger.info(
        "Building pipeline (index=%s, embedding=%s, llm=%s)",
        settings.index_name,
        settings.embedding_model,
        settings.llm_model,
    )

    embedder = GeminiEmbeddingAdapter(
        api_key=settings.embedding_api_key,
        model_name=settings.embedding_model,
        output_dimensionality=settings.embedding_dimension,
    )
    vector_store = build_vector_store(settings)
    llm = GeminiAdapter(api_key=settings.llm_api_key, model=settings.llm_model)

    return PipelineService(
        splitter=RecursiveTextSplitter(settings.chunk_size, settings.chunk_overlap),
        embedder=embedder,
        vector_store=vector_store,
        retriever=RetrievalService(embedder, vector_store, top_k=settings.top_k_results),
        answer_service=AnswerService(llm),
        id_generator=id_generator,
    )
