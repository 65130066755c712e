"""Configuration management for docqa."""

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from ..core.domain.exceptions import MissingAPIKeyError


def _sanitize_secret(value: str) -> str:
    """Remove BOM characters and whitespace from secrets.

    Secrets copied from cloud consoles or written by some editors may carry a
    BOM that breaks HTTP headers.
    """
    if not value:
        return value
    return value.lstrip("\ufeff").strip()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Google AI API (embeddings and generation may use separate keys)
    embedding_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("EMBEDDING_API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY"),
    )
    llm_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("LLM_API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY"),
    )

    # Qdrant settings
    qdrant_url: str = ""
    qdrant_api_key: str = ""
    qdrant_location: str = ""  # e.g. ":memory:" for an in-process index
    index_name: str = "rag-example-768"
    create_index_if_missing: bool = True

    @field_validator(
        "embedding_api_key", "llm_api_key", "qdrant_api_key", "qdrant_url", mode="after"
    )
    @classmethod
    def sanitize_secrets(cls, value: str) -> str:
        """Remove BOM and whitespace from secret values."""
        return _sanitize_secret(value)

    # Model settings
    embedding_model: str = "gemini-embedding-001"
    embedding_dimension: int = 768
    llm_model: str = "gemini-2.5-flash"

    # RAG settings
    chunk_size: int = 500
    chunk_overlap: int = 100
    top_k_results: int = 3
    upsert_batch_size: int = 100
    max_document_length: int = 500_000
    max_question_length: int = 1_000

    # Server
    environment: Literal["development", "test", "production"] = "development"
    allowed_origins: Annotated[list[str], NoDecode] = Field(default_factory=list)
    host: str = "0.0.0.0"
    port: int = 3000

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def split_origins(cls, value: object) -> object:
        """Accept a comma separated ALLOWED_ORIGINS string."""
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    log_file: Path | None = None

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate_credentials(self) -> None:
        """Fail fast when a provider credential is missing.

        Raises:
            MissingAPIKeyError: If an API key or the Qdrant endpoint is not set.
        """
        missing = []
        if not self.embedding_api_key:
            missing.append("EMBEDDING_API_KEY (or GEMINI_API_KEY)")
        if not self.llm_api_key:
            missing.append("LLM_API_KEY (or GEMINI_API_KEY)")
        if not self.qdrant_location and not self.qdrant_url:
            missing.append("QDRANT_URL")

        if missing:
            raise MissingAPIKeyError(
                f"Missing required configuration: {', '.join(missing)}",
                context={"missing": missing},
            )


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()
