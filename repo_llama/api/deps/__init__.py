"""Dependency injection helpers."""

from .dependencies import (
    ServiceCache,
    get_chat_service,
    get_context_service,
    get_ingestion_service,
    get_retrieval_service,
    get_service_cache,
)

__all__ = [
    "ServiceCache",
    "get_chat_service",
    "get_context_service",
    "get_ingestion_service",
    "get_retrieval_service",
    "get_service_cache",
]
