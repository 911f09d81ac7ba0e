"""Application configuration via environment variables."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["json", "console"] = Field(
        default="console",
        description="Log output format",
    )

    # API Server
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, description="API server port")
    api_reload: bool = Field(default=False, description="Enable auto-reload for development")

    # Providers
    llm_provider: str = Field(
        default="gemini",
        description="Text generation provider (gemini, stub)",
    )
    image_gen_provider: str = Field(
        default="imagen",
        description="Image generation provider (imagen, stub)",
    )

    # Google Gemini
    google_api_key: str | None = Field(default=None, description="Google API key for Gemini/Imagen")
    default_model: str = Field(
        default="gemini-2.0-flash",
        description="Text model used when no preference has been saved",
    )
    image_models: list[str] = Field(
        default_factory=lambda: ["imagen-4.0-generate-001", "imagen-3.0-generate-001"],
        description="Image models tried in order until one succeeds",
    )

    # Storage
    store_backend: Literal["local", "mongo"] = Field(
        default="local",
        description="Project store backend (local JSON file or MongoDB)",
    )
    local_store_path: Path = Field(
        default=Path("./data/content_os.json"),
        description="File holding the local key-value store",
    )
    mongodb_uri: str = Field(
        default="mongodb://localhost:27017/",
        description="MongoDB connection string",
    )
    mongodb_db_name: str = Field(default="content_os", description="MongoDB database name")

    # Generation pipeline
    bulk_batch_size: int = Field(
        default=3,
        description="Section-content calls issued concurrently per bulk batch",
    )
    min_section_length: int = Field(
        default=50,
        description="Voiceover text shorter than this counts as unfilled",
    )
    repurpose_context_chars: int = Field(
        default=10_000,
        description="Maximum script characters sent as repurposing context",
    )
    section_max_output_tokens: int = Field(
        default=8192,
        description="Maximum output tokens for a section-content call",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


# Convenience alias
settings = get_settings()
