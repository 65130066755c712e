"""Unit tests for settings, logging setup and the composition root."""

import json
import logging
import sys

import pytest

from docqa.adapters.outbound.vector_store.qdrant_adapter import QdrantAdapter
from docqa.composition.container import build_pipeline, build_vector_store
from docqa.config.logging import LOGGER_NAME, JSONLineFormatter, setup_logging
from docqa.config.settings import Settings
from docqa.core.domain.exceptions import EmptyInputError, MissingAPIKeyError
from docqa.core.services.ids import SequentialIdGenerator

pytestmark = pytest.mark.unit

ENV_KEYS = [
    "EMBEDDING_API_KEY",
    "LLM_API_KEY",
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "QDRANT_URL",
    "QDRANT_API_KEY",
    "QDRANT_LOCATION",
    "INDEX_NAME",
    "ENVIRONMENT",
    "ALLOWED_ORIGINS",
]


@pytest.fixture
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, clean_env):
        settings = Settings(_env_file=None)

        assert settings.index_name == "rag-example-768"
        assert settings.embedding_dimension == 768
        assert settings.llm_model == "gemini-2.5-flash"
        assert (settings.chunk_size, settings.chunk_overlap) == (500, 100)
        assert settings.top_k_results == 3
        assert settings.port == 3000
        assert settings.environment == "development"
        assert not settings.is_production

    def test_single_gemini_key_serves_both(self, clean_env):
        clean_env.setenv("GEMINI_API_KEY", "shared-key")

        settings = Settings(_env_file=None)

        assert settings.embedding_api_key == "shared-key"
        assert settings.llm_api_key == "shared-key"

    def test_specific_key_wins(self, clean_env):
        clean_env.setenv("GEMINI_API_KEY", "shared-key")
        clean_env.setenv("LLM_API_KEY", "llm-key")

        settings = Settings(_env_file=None)

        assert settings.llm_api_key == "llm-key"
        assert settings.embedding_api_key == "shared-key"

    def test_secrets_sanitized(self, clean_env):
        clean_env.setenv("QDRANT_API_KEY", "\ufeffsecret-key \n")
        assert Settings(_env_file=None).qdrant_api_key == "secret-key"

    def test_allowed_origins_comma_separated(self, clean_env):
        clean_env.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example,")
        clean_env.setenv("ENVIRONMENT", "production")

        settings = Settings(_env_file=None)

        assert settings.allowed_origins == ["https://a.example", "https://b.example"]
        assert settings.is_production

    def test_validate_credentials_lists_missing(self, clean_env):
        with pytest.raises(MissingAPIKeyError) as exc_info:
            Settings(_env_file=None).validate_credentials()

        assert len(exc_info.value.extra_context["missing"]) == 3

    def test_local_location_replaces_url(self, settings):
        settings.validate_credentials()


class TestComposition:
    """Tests for the composition root."""

    def test_build_vector_store_from_settings(self, settings):
        store = build_vector_store(settings)

        assert isinstance(store, QdrantAdapter)
        assert store.collection_name == "rag-example-768"
        assert store.location == ":memory:"
        assert store.dimension == settings.embedding_dimension

    def test_build_pipeline_wires_settings(self, settings):
        ids = SequentialIdGenerator()

        pipeline = build_pipeline(settings, id_generator=ids)

        assert pipeline.splitter.chunk_size == 500
        assert pipeline.retriever.top_k == 3
        assert pipeline.retriever.vector_store is pipeline.vector_store
        assert pipeline.embedder.output_dimensionality == settings.embedding_dimension
        assert pipeline.id_generator is ids

    def test_build_pipeline_requires_credentials(self, clean_env):
        with pytest.raises(MissingAPIKeyError):
            build_pipeline(Settings(_env_file=None))


class TestLogging:
    """Tests for logging setup."""

    def test_setup_logging_replaces_handlers(self, tmp_path):
        setup_logging("debug", log_file=tmp_path / "logs" / "docqa.log")
        logger = setup_logging("debug")

        assert logger.name == LOGGER_NAME
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_unknown_level_falls_back_to_info(self):
        assert setup_logging("chatty").level == logging.INFO

    def test_json_line_carries_structured_fields(self):
        record = logging.getLogger("docqa.test").makeRecord(
            "docqa.test",
            logging.INFO,
            __file__,
            1,
            "POST %s",
            ("/api/index-document",),
            None,
            extra={"method": "POST", "status_code": 200, "duration_ms": 12},
        )

        entry = json.loads(JSONLineFormatter().format(record))

        assert entry["level"] == "info"
        assert entry["message"] == "POST /api/index-document"
        assert (entry["method"], entry["status_code"], entry["duration_ms"]) == ("POST", 200, 12)
        assert "error" not in entry
        assert "path" not in entry

    def test_json_line_includes_error_code(self):
        try:
            raise EmptyInputError("Cannot split empty text")
        except EmptyInputError:
            record = logging.getLogger("docqa.test").makeRecord(
                "docqa.test", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
            )

        entry = json.loads(JSONLineFormatter().format(record))

        assert entry["error"]["type"] == "EmptyInputError"
        assert entry["error"]["code"] == "DQA_CHK_002"
        assert "Traceback" in entry["error"]["traceback"]
