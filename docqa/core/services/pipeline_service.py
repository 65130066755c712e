"""Index-document and answer-question pipelines.

Both operations run their steps strictly in sequence. Any step failure
aborts the rest of the request and is re-raised as a PipelineError whose
message is safe to show to clients.
"""

import logging
import time
from datetime import UTC, datetime

from ..domain import (
    AnswerQuestionRequest,
    AnswerResult,
    IndexDocumentRequest,
    IndexResult,
    VectorRecord,
)
from ..domain.exceptions import (
    AnswerFailedError,
    ChunkVectorMismatchError,
    IndexingFailedError,
)
from ..ports.embedding_port import EmbeddingPort
from ..ports.vector_store_port import VectorStorePort
from .answer_service import AnswerService
from .chunking import RecursiveTextSplitter
from .ids import IdGenerator, TimestampIdGenerator
from .prompts import NOT_FOUND_ANSWER
from .retrieval_service import RetrievalService

logger = logging.getLogger(__name__)

INDEX_FAILED_MESSAGE = "Failed to index document. Please try again."
ANSWER_FAILED_MESSAGE = "Failed to answer the question. Please try again."


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


class PipelineService:
    """Composes chunking, embedding, storage, retrieval and generation."""

    def __init__(
        self,
        splitter: RecursiveTextSplitter,
        embedder: EmbeddingPort,
        vector_store: VectorStorePort,
        retriever: RetrievalService,
        answer_service: AnswerService,
        id_generator: IdGenerator | None = None,
    ) -> None:
        self.splitter = splitter
        self.embedder = embedder
        self.vector_store = vector_store
        self.retriever = retriever
        self.answer_service = answer_service
        self.id_generator = id_generator or TimestampIdGenerator()

    def _build_records(self, chunks: list[str], vectors: list[list[float]]) -> list[VectorRecord]:
        if len(chunks) != len(vectors):
            raise ChunkVectorMismatchError(
                "Mismatch between chunks and vectors length",
                context={"chunks": len(chunks), "vectors": len(vectors)},
            )

        timestamp = datetime.now(UTC).isoformat()
        return [
            VectorRecord(
                id=self.id_generator.new_id(i, chunk),
                values=vector,
                metadata={"text": chunk, "timestamp": timestamp},
            )
            for i, (chunk, vector) in enumerate(zip(chunks, vectors, strict=True))
        ]

    def index_document(self, request: IndexDocumentRequest) -> IndexResult:
        """Chunk, embed and store a validated document.

        Raises:
            IndexingFailedError: If any step fails.
        """
        started = time.perf_counter()
        logger.info("Indexing started (%d characters)", len(request.document_text))

        try:
            chunks = self.splitter.split(request.document_text)
            logger.info("Step 1: created %d chunks", len(chunks))

            vectors = self.embedder.embed_documents(chunks)
            logger.info(
                "Step 2: generated %d vectors (dimension: %d)",
                len(vectors),
                len(vectors[0]) if vectors else 0,
            )

            records = self._build_records(chunks, vectors)
            record_count = self.vector_store.upsert(records)
            logger.info("Step 3: stored %d records", record_count)
        except Exception as e:
            duration = _elapsed_ms(started)
            logger.error(
                "Indexing failed after %dms: %s",
                duration,
                e,
                exc_info=True,
                extra={"duration_ms": duration, "error_code": getattr(e, "error_code", None)},
            )
            raise IndexingFailedError(
                INDEX_FAILED_MESSAGE,
                cause=e,
                context={"duration_ms": duration},
                duration_ms=duration,
            ) from e

        duration = _elapsed_ms(started)
        logger.info("Indexing finished (%dms)", duration)
        return IndexResult(
            message=f"Document successfully indexed with {len(chunks)} chunks.",
            chunk_count=len(chunks),
            record_count=record_count,
            duration_ms=duration,
        )

    def answer_question(self, request: AnswerQuestionRequest) -> AnswerResult:
        """Retrieve context for a validated question and generate an answer.

        Returns a not-found result (``found=False``) when nothing relevant is
        stored.

        Raises:
            AnswerFailedError: If retrieval or generation fails.
        """
        started = time.perf_counter()
        logger.info("Query started")

        try:
            chunks = self.retriever.retrieve(request.question)
            if not chunks:
                duration = _elapsed_ms(started)
                logger.info("Query finished without context (%dms)", duration)
                return AnswerResult(
                    answer=NOT_FOUND_ANSWER,
                    chunks_retrieved=0,
                    duration_ms=duration,
                    found=False,
                )

            answer = self.answer_service.generate(request.question, chunks)
        except Exception as e:
            duration = _elapsed_ms(started)
            logger.error(
                "Query failed after %dms: %s",
                duration,
                e,
                exc_info=True,
                extra={"duration_ms": duration, "error_code": getattr(e, "error_code", None)},
            )
            raise AnswerFailedError(
                ANSWER_FAILED_MESSAGE,
                cause=e,
                context={"duration_ms": duration},
                duration_ms=duration,
            ) from e

        duration = _elapsed_ms(started)
        logger.info("Query finished (%dms)", duration)
        return AnswerResult(
            answer=answer,
            chunks_retrieved=len(chunks),
            duration_ms=duration,
        )
