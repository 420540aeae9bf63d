"""Environment-based application settings. Read-only; no business logic."""

from functools import lru_cache
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
        protected_namespaces=(),
    )

    app_name: str = Field(default="mock-openai-service", description="Service name")
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Runtime environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Log level name")
    quiet_loggers: list[str] = Field(
        default_factory=lambda: ["uvicorn.access", "httpx"],
        description="Loggers capped at WARNING (JSON list when set from the environment)",
    )

    # Server
    host: str = Field(default="0.0.0.0", description="Listen host")
    port: int = Field(default=8000, ge=1, le=65535, description="Listen port")
    api_prefix: str = Field(default="/mock/v1", description="Path prefix of the OpenAI-compatible routes")

    # Advertised models
    model_id: str = Field(default="mock-gpt-4", description="Chat model id reported by /models and completions")
    embedding_model_id: str = Field(
        default="mock-text-embedding-ada-002", description="Model id reported by /embeddings"
    )
    owned_by: str = Field(default="tanzu-workshop", description="owned_by field of the model listing")

    # Synthetic generation
    embedding_dimension: int = Field(default=1536, ge=1, description="Length of generated embedding vectors")
    stream_delay_ms: int = Field(default=50, ge=0, description="Delay before each streamed chunk (ms)")
    responses_path: str | None = Field(
        default=None,
        description="Optional JSON rule file replacing the bundled config/responses/static.json",
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance. Use for app lifetime."""
    return Settings()
