"""Configuration management for Second Brain."""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _sanitize_secret(value: str) -> str:
    """Remove BOM characters and whitespace from secrets.

    Secrets pasted into env files or secret managers sometimes carry a BOM,
    which breaks HTTP headers.
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

    # Embedding provider (OpenAI-compatible)
    openai_api_key: str = ""
    embedding_model: str = "text-embedding-ada-002"
    embedding_api_url: str = "https://api.openai.com/v1/embeddings"
    embedding_dimension: int = Field(default=1536, ge=0)
    request_timeout: float = Field(default=10.0, gt=0)

    # Storage backend
    storage_backend: Literal["local", "supabase"] = "local"
    supabase_url: str = ""
    supabase_key: str = ""
    storage_bucket: str = "user-files"
    data_dir: Path = Path("./data")
    default_owner_id: str = "local-user"

    @field_validator("openai_api_key", "supabase_key", "supabase_url", mode="after")
    @classmethod
    def sanitize_secrets(cls, value: str) -> str:
        """Remove BOM and whitespace from secret values."""
        return _sanitize_secret(value)

    # Conflict detection
    similarity_threshold: float = Field(default=0.85, ge=0.0, le=1.0)
    match_count: int = Field(default=5, ge=1)
    excerpt_length: int = Field(default=100, ge=1)
    diagnostic_threshold: float = Field(default=0.5, ge=0.0, le=1.0)

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    @property
    def sqlite_path(self) -> Path:
        """SQLite database used by the local metadata store."""
        return self.data_dir / "second_brain.db"

    @property
    def blob_dir(self) -> Path:
        """Directory holding raw file bytes for the local blob store."""
        return self.data_dir / "blobs"

    def ensure_directories(self) -> None:
        """Create local data directories if they don't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.blob_dir.mkdir(parents=True, exist_ok=True)


# Global settings instance
settings = Settings()
