"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: repo_llama.configs, repo_llama.application, repo_llama.boundary
System role: DI container for service injection
"""

from functools import lru_cache

from repo_llama.application.services import (
    ChatService,
    ContextService,
    IngestionService,
    RetrievalService,
)
from repo_llama.boundary.ollama import OllamaEmbeddingClient, OllamaGenerationClient
from repo_llama.boundary.store import FragmentStore
from repo_llama.configs import Settings, get_settings


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings
        self._store = None
        self._embedder = None
        self._generator = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def store(self) -> FragmentStore:
        """Get cached fragment store."""
        if self._store is None:
            self._store = FragmentStore(self.settings.store.data_dir)
        return self._store

    @property
    def embedder(self) -> OllamaEmbeddingClient:
        """Get cached embedding client."""
        if self._embedder is None:
            ollama = self.settings.ollama
            self._embedder = OllamaEmbeddingClient(
                base_url=ollama.base_url,
                model=ollama.embedding_model,
                timeout=ollama.timeout_seconds,
                progress_every=ollama.progress_every,
            )
        return self._embedder

    @property
    def generator(self) -> OllamaGenerationClient:
        """Get cached generation client."""
        if self._generator is None:
            ollama = self.settings.ollama
            self._generator = OllamaGenerationClient(
                base_url=ollama.base_url,
                model=ollama.generation_model,
                timeout=ollama.timeout_seconds,
            )
        return self._generator

    def retrieval_service(self) -> RetrievalService:
        return RetrievalService(self.store, self.embedder, top_k=self.settings.retrieval.top_k)

    async def aclose(self) -> None:
        """Close HTTP clients and drop all cached instances."""
        if self._embedder is not None:
            await self._embedder.aclose()
        if self._generator is not None:
            await self._generator.aclose()
        self._store = None
        self._embedder = None
        self._generator = None


@lru_cache
def get_service_cache() -> ServiceCache:
    return ServiceCache()


def get_ingestion_service() -> IngestionService:
    cache = get_service_cache()
    return IngestionService(cache.store, cache.embedder, cache.settings.ingestion)


def get_retrieval_service() -> RetrievalService:
    return get_service_cache().retrieval_service()


def get_chat_service() -> ChatService:
    cache = get_service_cache()
    return ChatService(retrieval=cache.retrieval_service(), generator=cache.generator)


def get_context_service() -> ContextService:
    return ContextService(get_service_cache().store)
