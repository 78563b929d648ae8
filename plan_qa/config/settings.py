"""Configuration management for plan-qa."""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _sanitize_secret(value: str) -> str:
    """Remove BOM characters and whitespace from secrets.

    Secrets pasted into environment files or injected by a platform may carry
    a BOM that breaks HTTP headers.
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
    )

    # Google AI API (embeddings + completions)
    google_api_key: str = ""

    @field_validator("google_api_key", mode="after")
    @classmethod
    def sanitize_secrets(cls, value: str) -> str:
        """Remove BOM and whitespace from secret values."""
        return _sanitize_secret(value)

    # Embedding settings
    embedding_model: str = "gemini-embedding-001"
    embedding_task_type: str = "SEMANTIC_SIMILARITY"
    embedding_batch_size: int = 100

    # Completion settings
    llm_model: str = "gemini-2.0-flash"
    llm_temperature: float = 0.2
    llm_max_output_tokens: int = 2048

    # Uploaded documents
    uploads_dir: Path = Path("./uploads")
    max_upload_bytes: int = 25 * 1024 * 1024

    # Retrieval settings
    passage_size: int = 1000
    passage_overlap: int = 180
    top_k: int = 8
    fetch_concurrency: int = 4
    max_question_length: int = 2000

    # Timeouts for blocking external calls (seconds, <= 0 disables)
    embedding_timeout_seconds: float = 30.0
    generation_timeout_seconds: float = 60.0

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    debug: bool = False

    @property
    def is_configured(self) -> bool:
        """Whether the external-service credentials are present."""
        return bool(self.google_api_key)

    def ensure_directories(self) -> None:
        """Create the uploads directory if it doesn't exist."""
        self.uploads_dir.mkdir(parents=True, exist_ok=True)


# Global settings instance
settings = Settings()
