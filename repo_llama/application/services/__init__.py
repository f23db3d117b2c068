"""
Application services.

Exports: ChatService, ContextService, IngestionService, RetrievalService
"""

from .chat_service import ChatService, ChatStream
from .context_service import ContextService
from .ingestion_service import IngestionService
from .retrieval_service import RetrievalService

__all__ = [
    "ChatService",
    "ChatStream",
    "ContextService",
    "IngestionService",
    "RetrievalService",
]
