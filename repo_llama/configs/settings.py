"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from repo_llama.configs.base import BaseSettings
from repo_llama.configs.ingestion import IngestionSettings
from repo_llama.configs.ollama import OllamaSettings
from repo_llama.configs.store import FragmentStoreSettings, RetrievalSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    ollama: OllamaSettings = Field(default_factory=OllamaSettings)
    ingestion: IngestionSettings = Field(default_factory=IngestionSettings)
    store: FragmentStoreSettings = Field(default_factory=FragmentStoreSettings)
    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from repo_llama.configs import get_settings
        settings = get_settings()
    """
    return Settings()
