"""Unit tests for QdrantAdapter.

Round-trip tests run against qdrant-client's in-process ``:memory:`` mode;
failure paths use a MagicMock client.
"""

import threading
import time
from unittest.mock import MagicMock

import pytest

from docqa.adapters.outbound.vector_store.qdrant_adapter import (
    RECORD_ID_FIELD,
    QdrantAdapter,
    point_id_for,
)
from docqa.core.domain import VectorRecord
from docqa.core.domain.exceptions import (
    DimensionMismatchError,
    IndexNotFoundError,
    VectorStoreConnectionError,
    VectorStoreError,
)

pytestmark = pytest.mark.unit

DIMENSION = 4


def _record(record_id: str, values: list[float], text: str) -> VectorRecord:
    return VectorRecord(
        id=record_id,
        values=values,
        metadata={"text": text, "timestamp": "2024-01-01T00:00:00+00:00"},
    )


@pytest.fixture
def memory_client():
    from qdrant_client import QdrantClient

    return QdrantClient(location=":memory:")


@pytest.fixture
def store(memory_client):
    return QdrantAdapter("test-index", dimension=DIMENSION, client=memory_client)


@pytest.fixture
def mock_client():
    client = MagicMock()
    client.collection_exists.return_value = False
    return client


class TestPointIds:
    def test_point_id_is_stable_uuid(self):
        assert point_id_for("chunk_0_1") == point_id_for("chunk_0_1")
        assert point_id_for("chunk_0_1") != point_id_for("chunk_1_1")
        assert len(point_id_for("chunk_0_1")) == 36


class TestCollectionSetup:
    """Tests for ensure_collection."""

    def test_missing_collection_is_created(self, store, memory_client):
        store.ensure_collection()

        assert memory_client.collection_exists("test-index")
        stats = store.get_collection_stats()
        assert stats["index"] == "test-index"
        assert stats["count"] == 0
        assert stats["dimension"] == DIMENSION

    def test_missing_collection_without_create(self, memory_client):
        store = QdrantAdapter(
            "absent", dimension=DIMENSION, client=memory_client, create_if_missing=False
        )

        with pytest.raises(IndexNotFoundError):
            store.ensure_collection()

    def test_existing_collection_with_other_dimension(self, memory_client):
        QdrantAdapter("shared", dimension=8, client=memory_client).ensure_collection()

        with pytest.raises(DimensionMismatchError) as exc_info:
            QdrantAdapter("shared", dimension=DIMENSION, client=memory_client).ensure_collection()

        assert exc_info.value.extra_context["index_dimension"] == 8

    def test_backend_failure_is_wrapped(self, mock_client):
        mock_client.collection_exists.side_effect = RuntimeError("503")
        store = QdrantAdapter("test-index", dimension=DIMENSION, client=mock_client)

        with pytest.raises(VectorStoreError) as exc_info:
            store.ensure_collection()

        assert isinstance(exc_info.value.cause, RuntimeError)

    def test_collection_checked_once(self, mock_client):
        store = QdrantAdapter("test-index", dimension=DIMENSION, client=mock_client)
        mock_client.query_points.return_value = MagicMock(points=[])

        store.search([0.0] * DIMENSION)
        store.search([0.0] * DIMENSION)

        assert mock_client.collection_exists.call_count == 1
        mock_client.create_collection.assert_called_once()

    def test_connection_failure(self, monkeypatch):
        def broken_client(*args, **kwargs):
            raise ValueError("bad url")

        monkeypatch.setattr("qdrant_client.QdrantClient", broken_client)
        store = QdrantAdapter("test-index", url="http://qdrant.invalid:6333")

        with pytest.raises(VectorStoreConnectionError) as exc_info:
            store.get_collection_stats()

        assert exc_info.value.extra_context["url"] == "http://qdrant.invalid:6333"


class TestUpsertAndSearch:
    """Round trips through the in-memory store."""

    def test_stored_record_found_with_its_text(self, store):
        stored = store.upsert(
            [
                _record("chunk_0", [1.0, 0.0, 0.0, 0.0], "A cat sat on a mat."),
                _record("chunk_1", [0.0, 1.0, 0.0, 0.0], "A dog sat on a log."),
            ]
        )

        matches = store.search([1.0, 0.0, 0.0, 0.0], top_k=1)

        assert stored == 2
        assert len(matches) == 1
        assert matches[0].id == "chunk_0"
        assert matches[0].metadata["text"] == "A cat sat on a mat."
        assert RECORD_ID_FIELD not in matches[0].metadata

    def test_search_orders_by_similarity(self, store):
        store.upsert(
            [
                _record("far", [0.0, 0.0, 0.0, 1.0], "far"),
                _record("near", [1.0, 0.1, 0.0, 0.0], "near"),
                _record("middle", [1.0, 1.0, 0.0, 0.0], "middle"),
            ]
        )

        matches = store.search([1.0, 0.0, 0.0, 0.0], top_k=3)

        assert [m.id for m in matches] == ["near", "middle", "far"]
        assert matches[0].score >= matches[1].score >= matches[2].score

    def test_same_id_overwrites(self, store):
        store.upsert([_record("chunk_0", [1.0, 0.0, 0.0, 0.0], "old")])
        store.upsert([_record("chunk_0", [1.0, 0.0, 0.0, 0.0], "new")])

        assert store.get_collection_stats()["count"] == 1
        assert store.search([1.0, 0.0, 0.0, 0.0])[0].metadata["text"] == "new"

    def test_empty_store_returns_no_matches(self, store):
        assert store.search([1.0, 0.0, 0.0, 0.0]) == []

    def test_empty_upsert_is_noop(self, mock_client):
        store = QdrantAdapter("test-index", dimension=DIMENSION, client=mock_client)
        assert store.upsert([]) == 0
        mock_client.upsert.assert_not_called()


class TestValidationAndFailures:
    def test_wrong_vector_length_rejected_before_write(self, mock_client):
        store = QdrantAdapter("test-index", dimension=DIMENSION, client=mock_client)

        with pytest.raises(DimensionMismatchError):
            store.upsert(
                [
                    _record("ok", [0.1] * DIMENSION, "ok"),
                    _record("bad", [0.1] * (DIMENSION + 1), "bad"),
                ]
            )

        mock_client.upsert.assert_not_called()

    def test_wrong_query_length_rejected(self, store):
        with pytest.raises(DimensionMismatchError):
            store.search([0.1] * (DIMENSION - 1))

    def test_upsert_is_batched(self, mock_client):
        store = QdrantAdapter("test-index", dimension=DIMENSION, batch_size=2, client=mock_client)
        records = [_record(f"chunk_{i}", [0.1] * DIMENSION, f"t{i}") for i in range(5)]

        assert store.upsert(records) == 5
        sizes = [len(call.kwargs["points"]) for call in mock_client.upsert.call_args_list]
        assert sizes == [2, 2, 1]

    def test_failed_batch_reports_stored_count(self, mock_client):
        mock_client.upsert.side_effect = [None, RuntimeError("timeout")]
        store = QdrantAdapter("test-index", dimension=DIMENSION, batch_size=2, client=mock_client)
        records = [_record(f"chunk_{i}", [0.1] * DIMENSION, f"t{i}") for i in range(3)]

        with pytest.raises(VectorStoreError) as exc_info:
            store.upsert(records)

        assert exc_info.value.extra_context["stored"] == 2
        assert mock_client.upsert.call_count == 2

    def test_query_failure_is_wrapped(self, mock_client):
        mock_client.query_points.side_effect = RuntimeError("boom")
        store = QdrantAdapter("test-index", dimension=DIMENSION, client=mock_client)

        with pytest.raises(VectorStoreError):
            store.search([0.1] * DIMENSION)


class TestConcurrentFirstUse:
    """First use from several threads at once, as under FastAPI's threadpool."""

    def test_two_threads_create_collection_once(self, mock_client):
        started = threading.Barrier(2)

        def slow_exists(**kwargs):
            time.sleep(0.05)
            return mock_client.create_collection.call_count > 0

        mock_client.collection_exists.side_effect = slow_exists
        mock_client.create_collection.side_effect = lambda **kwargs: None
        store = QdrantAdapter("test-index", dimension=DIMENSION, client=mock_client)
        errors: list[Exception] = []

        def index(n: int) -> None:
            started.wait()
            try:
                store.upsert([_record(f"chunk_{n}", [0.1] * DIMENSION, f"t{n}")])
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=index, args=(n,)) for n in range(2)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert mock_client.create_collection.call_count == 1
        assert mock_client.upsert.call_count == 2

    def test_collection_created_elsewhere_counts_as_ready(self, mock_client):
        mock_client.collection_exists.side_effect = [False, True]
        mock_client.create_collection.side_effect = RuntimeError("Collection already exists")
        store = QdrantAdapter("test-index", dimension=DIMENSION, client=mock_client)

        store.ensure_collection()

        assert store.upsert([_record("chunk_0", [0.1] * DIMENSION, "t")]) == 1

    def test_failed_create_still_raises(self, mock_client):
        mock_client.create_collection.side_effect = RuntimeError("forbidden")
        store = QdrantAdapter("test-index", dimension=DIMENSION, client=mock_client)

        with pytest.raises(VectorStoreError) as exc_info:
            store.ensure_collection()

        assert str(exc_info.value.cause) == "forbidden"
