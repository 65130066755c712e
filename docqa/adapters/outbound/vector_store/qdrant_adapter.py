"""Qdrant vector store adapter.

One Qdrant collection plays the role of the named index. Qdrant point ids
must be UUIDs or integers, so each record id is mapped to a stable UUID and
the original id is kept in the payload under ``record_id``.
"""

import logging
import threading
import uuid
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from qdrant_client import QdrantClient

from ....core.domain import SearchMatch, VectorRecord
from ....core.domain.exceptions import (
    DimensionMismatchError,
    IndexNotFoundError,
    VectorStoreConnectionError,
    VectorStoreError,
)
from ....core.ports.vector_store_port import VectorStorePort

logger = logging.getLogger(__name__)

# Constants
UPSERT_BATCH_SIZE = 100
EMBEDDING_DIMENSION = 768
RECORD_ID_FIELD = "record_id"
POINT_ID_NAMESPACE = uuid.UUID("6f1c3a52-5d0e-4d47-9b8e-3c2f7a9e0d41")


def point_id_for(record_id: str) -> str:
    """Map a record id to the UUID used as Qdrant point id."""
    return str(uuid.uuid5(POINT_ID_NAMESPACE, record_id))


class QdrantAdapter(VectorStorePort):
    """Qdrant-backed index of chunk records (cosine distance)."""

    def __init__(
        self,
        collection_name: str,
        dimension: int = EMBEDDING_DIMENSION,
        url: str = "",
        api_key: str = "",
        location: str = "",
        batch_size: int = UPSERT_BATCH_SIZE,
        create_if_missing: bool = True,
        client: "QdrantClient | None" = None,
    ) -> None:
        """Initialize the Qdrant vector store.

        Args:
            collection_name: Name of the collection used as the index.
            dimension: Vector size of the collection.
            url: Qdrant server or cloud cluster URL.
            api_key: Qdrant API key.
            location: Alternative to ``url``, e.g. ``":memory:"`` for an in-process store.
            batch_size: Maximum number of points per upsert request.
            create_if_missing: Create the collection on first use instead of failing.
            client: Pre-built client; skips connection setup.
        """
        self.collection_name = collection_name
        self.dimension = dimension
        self.url = url
        self.api_key = api_key
        self.location = location
        self.batch_size = batch_size
        self.create_if_missing = create_if_missing
        self._client: "QdrantClient | None" = client
        self._collection_checked = False
        self._setup_lock = threading.Lock()

    def _get_client(self) -> "QdrantClient":
        """Get or create Qdrant client connection, checking the collection once."""
        if self._client is not None and self._collection_checked:
            return self._client

        with self._setup_lock:
            if self._client is None:
                self._client = self._connect()
            if not self._collection_checked:
                self._check_collection(self._client)
                self._collection_checked = True
        return self._client

    def _connect(self) -> "QdrantClient":
        try:
            from qdrant_client import QdrantClient

            if self.location:
                client = QdrantClient(location=self.location)
            else:
                client = QdrantClient(url=self.url, api_key=self.api_key or None)
        except Exception as e:
            raise VectorStoreConnectionError(
                f"Failed to connect to Qdrant at {self.location or self.url}",
                cause=e,
                context={"url": self.url, "location": self.location},
            ) from e

        logger.info("Connected to Qdrant at: %s", self.location or self.url)
        return client

    def ensure_collection(self) -> None:
        """Check that the collection exists with the configured vector size.

        Safe to call from several threads; the check runs once per adapter.

        Raises:
            IndexNotFoundError: Collection is missing and creation is disabled.
            DimensionMismatchError: Collection exists with another vector size.
            VectorStoreError: Qdrant could not be queried.
        """
        self._get_client()

    def _check_collection(self, client: "QdrantClient") -> None:
        from qdrant_client.http import models

        try:
            if not client.collection_exists(collection_name=self.collection_name):
                if not self.create_if_missing:
                    raise IndexNotFoundError(
                        f"Index '{self.collection_name}' does not exist",
                        context={"collection": self.collection_name},
                    )
                self._create_collection(client, models)
                return

            vectors = client.get_collection(
                collection_name=self.collection_name
            ).config.params.vectors
            size = getattr(vectors, "size", None)
            if size is not None and size != self.dimension:
                raise DimensionMismatchError(
                    f"Index '{self.collection_name}' has dimension {size}, "
                    f"expected {self.dimension}",
                    context={"collection": self.collection_name, "index_dimension": size},
                )
        except (VectorStoreError, DimensionMismatchError):
            raise
        except Exception as e:
            raise VectorStoreError(
                f"Failed to check collection {self.collection_name}",
                cause=e,
                context={"collection": self.collection_name},
            ) from e

    def _create_collection(self, client: "QdrantClient", models: Any) -> None:
        logger.info("Creating collection %s", self.collection_name)
        try:
            client.create_collection(
                collection_name=self.collection_name,
                vectors_config=models.VectorParams(
                    size=self.dimension,
                    distance=models.Distance.COSINE,
                ),
            )
        except Exception:
            # Another process may have created it between the check and the create
            if not client.collection_exists(collection_name=self.collection_name):
                raise
            logger.info("Collection %s was created concurrently", self.collection_name)

    def _check_dimension(self, vector: Sequence[float], record_id: str | None = None) -> None:
        if len(vector) != self.dimension:
            raise DimensionMismatchError(
                f"Vector length {len(vector)} does not match index dimension {self.dimension}",
                context={"collection": self.collection_name, "record_id": record_id},
            )

    def upsert(self, records: Sequence[VectorRecord]) -> int:
        """Write records in sequential batches.

        Batches are not atomic as a group: if one fails, earlier batches stay
        stored and the error context reports how many were written.

        Args:
            records: Records to store.

        Returns:
            Number of records stored.
        """
        if not records:
            return 0

        for record in records:
            self._check_dimension(record.values, record.id)

        from qdrant_client.models import PointStruct

        client = self._get_client()

        points = [
            PointStruct(
                id=point_id_for(record.id),
                vector=list(record.values),
                payload={RECORD_ID_FIELD: record.id, **record.metadata},
            )
            for record in records
        ]

        stored = 0
        for i in range(0, len(points), self.batch_size):
            batch = points[i : i + self.batch_size]
            try:
                client.upsert(collection_name=self.collection_name, points=batch, wait=True)
            except Exception as e:
                raise VectorStoreError(
                    f"Failed to upsert batch starting at record {i}",
                    cause=e,
                    context={"collection": self.collection_name, "stored": stored},
                ) from e
            stored += len(batch)

        logger.info("Stored %d records in %s", stored, self.collection_name)
        return stored

    def search(self, vector: list[float], top_k: int = 3) -> list[SearchMatch]:
        """Return up to ``top_k`` most similar records, best first.

        Args:
            vector: Query embedding.
            top_k: Maximum number of matches.

        Returns:
            List of SearchMatch objects with their stored metadata.
        """
        self._check_dimension(vector)
        client = self._get_client()

        try:
            results = client.query_points(
                collection_name=self.collection_name,
                query=list(vector),
                limit=top_k,
                with_payload=True,
            )
        except Exception as e:
            raise VectorStoreError(
                f"Failed to query {self.collection_name}",
                cause=e,
                context={"collection": self.collection_name, "top_k": top_k},
            ) from e

        matches = []
        for hit in results.points:
            payload = dict(hit.payload) if hit.payload else {}
            record_id = payload.pop(RECORD_ID_FIELD, None) or str(hit.id)
            matches.append(SearchMatch(id=record_id, metadata=payload, score=hit.score))
        return matches

    def get_collection_stats(self) -> dict[str, Any]:
        """Get statistics for the collection.

        Returns:
            Dict with index name, point count, status and dimension.
        """
        client = self._get_client()
        try:
            info = client.get_collection(collection_name=self.collection_name)
        except Exception as e:
            raise VectorStoreError(
                f"Failed to get stats for {self.collection_name}",
                cause=e,
                context={"collection": self.collection_name},
            ) from e

        return {
            "index": self.collection_name,
            "count": info.points_count or 0,
            "status": str(getattr(info.status, "value", info.status)),
            "dimension": self.dimension,
        }
