"""API routers."""

from .chat import router as chat_router
from .contexts import router as contexts_router
from .health import router as health_router
from .ingest import router as ingest_router
from .search import router as search_router

__all__ = [
    "chat_router",
    "contexts_router",
    "health_router",
    "ingest_router",
    "search_router",
]
