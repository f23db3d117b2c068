"""
Ollama configuration settings.

Endpoint, model names and timeouts for the embedding and generation services.

Dependencies: pydantic, pydantic_settings
System role: External model service configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class OllamaSettings(BaseSettings):
    """Ollama embedding and generation configuration."""

    model_config = SettingsConfigDict(
        env_prefix="OLLAMA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str = Field(
        default="http://localhost:11434",
        description="Base URL of the Ollama server",
    )
    embedding_model: str = Field(
        default="nomic-embed-text",
        description="Model used for /api/embeddings (must be pulled in Ollama)",
    )
    generation_model: str = Field(
        default="llama3.1",
        description="Model used for /api/generate",
    )
    timeout_seconds: float = Field(
        default=120.0,
        gt=0,
        description="Timeout applied to every request; expiry is a transport failure",
    )
    progress_every: int = Field(
        default=10,
        ge=1,
        description="Log embedding progress every N items",
    )
