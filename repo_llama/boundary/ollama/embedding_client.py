"""
Ollama embedding client.

One request per text against /api/embeddings, issued sequentially. The first
failure aborts the whole call; callers never see a partial list.

Dependencies: httpx, repo_llama.boundary.ollama.base
System role: Embedding generation for ingestion and queries
"""

import logging
import math
from collections.abc import Callable, Sequence
from typing import Protocol, runtime_checkable

import httpx

from repo_llama.core.exceptions import RemoteError

from .base import OllamaHttpClient, remote_error, transport_error

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


@runtime_checkable
class EmbeddingClient(Protocol):
    """Anything that turns texts into positionally aligned vectors."""

    async def embed(
        self,
        texts: Sequence[str],
        on_progress: ProgressCallback | None = None,
    ) -> list[list[float]]:
        ...


class OllamaEmbeddingClient(OllamaHttpClient):
    """Embedding client for Ollama's /api/embeddings endpoint."""

    def __init__(
        self,
        base_url: str = "http://localhost:11434",
        model: str = "nomic-embed-text",
        timeout: float = 120.0,
        progress_every: int = 10,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(base_url=base_url, model=model, timeout=timeout, client=client)
        self._progress_every = max(1, progress_every)

    async def embed_one(self, text: str) -> list[float]:
        """
        Embed a single text.

        Raises:
            TransportError: Network failure or timeout
            RemoteError: Non-success status or a body without a usable embedding
        """
        url = self._url("/api/embeddings")
        try:
            response = await self._client.post(url, json={"model": self._model, "prompt": text})
        except httpx.HTTPError as e:
            raise transport_error(e, url) from e

        if not response.is_success:
            raise remote_error(response, response.text)

        try:
            data = response.json()
        except ValueError as e:
            raise RemoteError(
                "Ollama API error: response is not JSON",
                status_code=response.status_code,
                status_text="invalid JSON body",
            ) from e

        embedding = data.get("embedding") if isinstance(data, dict) else None
        if not isinstance(embedding, list) or not embedding:
            raise RemoteError(
                "Ollama API error: response has no embedding",
                status_code=response.status_code,
                status_text="missing embedding",
            )
        try:
            vector = [float(value) for value in embedding]
        except (TypeError, ValueError) as e:
            raise RemoteError(
                "Ollama API error: embedding holds non-numeric values",
                status_code=response.status_code,
                status_text="malformed embedding",
            ) from e
        if not all(math.isfinite(value) for value in vector):
            raise RemoteError(
                "Ollama API error: embedding holds non-finite values",
                status_code=response.status_code,
                status_text="malformed embedding",
            )
        return vector

    async def embed(
        self,
        texts: Sequence[str],
        on_progress: ProgressCallback | None = None,
    ) -> list[list[float]]:
        """
        Embed texts one at a time, in order.

        Args:
            texts: Texts to embed
            on_progress: Optional callback receiving (done, total) after each item

        Returns:
            list[list[float]]: result[i] is the embedding of texts[i]

        Raises:
            TransportError: First network failure, nothing is returned
            RemoteError: First service failure, nothing is returned
        """
        total = len(texts)
        logger.info(f"Generating embeddings for {total} chunks...", extra={"model": self._model})

        embeddings: list[list[float]] = []
        for index, text in enumerate(texts):
            try:
                embeddings.append(await self.embed_one(text))
            except Exception as e:
                logger.error(
                    f"Failed to embed chunk index {index}",
                    extra={"index": index, "error_type": type(e).__name__, "error_msg": str(e)},
                )
                raise

            done = index + 1
            if done % self._progress_every == 0:
                logger.info(f"Processed {done}/{total} chunks")
            if on_progress is not None:
                on_progress(done, total)

        return embeddings
