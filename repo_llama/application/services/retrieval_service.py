"""
Retrieval service.

Embeds a query and ranks it against one explicitly named context.

Dependencies: repo_llama.boundary, repo_llama.core.similarity
System role: RAG retrieval business logic
"""

import logging

from fastapi.concurrency import run_in_threadpool

from repo_llama.boundary.ollama import EmbeddingClient
from repo_llama.boundary.store import FragmentStore
from repo_llama.core.exceptions import ValidationError
from repo_llama.core.similarity import rank_fragments
from repo_llama.models.fragment import ScoredFragment

logger = logging.getLogger(__name__)


class RetrievalService:
    """Top-k fragment retrieval over a stored context."""

    def __init__(self, store: FragmentStore, embedder: EmbeddingClient, top_k: int = 5) -> None:
        self._store = store
        self._embedder = embedder
        self._top_k = top_k

    @property
    def top_k(self) -> int:
        return self._top_k

    async def search(
        self,
        query: str | None,
        context_name: str | None,
        k: int | None = None,
    ) -> list[ScoredFragment]:
        """
        Retrieve the fragments most similar to a query.

        Args:
            query: Natural-language query
            context_name: Context to search
            k: Number of results (defaults to the configured top_k)

        Returns:
            list[ScoredFragment]: Best first

        Raises:
            ValidationError: Missing query or context name
            NotFoundError: Unknown context
            CorruptCollectionError: Stored context fails validation
            TransportError, RemoteError: Query embedding failed
            DimensionMismatchError: Query and context embeddings differ in length
        """
        if not query or not query.strip():
            raise ValidationError("Query is required", field="query")
        if not context_name:
            raise ValidationError("Context name is required", field="context_name")

        collection = await run_in_threadpool(self._store.load, context_name)
        [query_embedding] = await self._embedder.embed([query])

        results = rank_fragments(query_embedding, collection.fragments, self._top_k if k is None else k)
        logger.info(
            "Retrieved fragments",
            extra={
                "context_name": collection.name,
                "candidates": len(collection.fragments),
                "returned": len(results),
            },
        )
        return results
