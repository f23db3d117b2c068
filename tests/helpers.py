"""
Test helpers shared across the suite.

Dependencies: httpx
"""

import json
from collections.abc import Callable, Sequence

import httpx

from repo_llama.core.exceptions import TransportError


class FakeEmbeddingClient:
    """In-memory EmbeddingClient returning canned vectors by text."""

    def __init__(
        self,
        vectors: dict[str, list[float]] | None = None,
        default: list[float] | None = None,
        fail_on: str | None = None,
    ) -> None:
        self.vectors = vectors or {}
        self.default = default or [1.0, 0.0]
        self.fail_on = fail_on
        self.calls: list[list[str]] = []

    async def embed(self, texts: Sequence[str], on_progress=None) -> list[list[float]]:
        self.calls.append(list(texts))
        result = []
        for index, text in enumerate(texts):
            if self.fail_on is not None and self.fail_on in text:
                raise TransportError("connection refused", url="http://ollama.test/api/embeddings")
            result.append(self.vectors.get(text, self.default))
            if on_progress:
                on_progress(index + 1, len(texts))
        return result


def ndjson(*records: dict) -> bytes:
    """Encode records as newline-delimited JSON."""
    return b"".join(json.dumps(record, ensure_ascii=False).encode("utf-8") + b"\n" for record in records)


def mock_async_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    """AsyncClient served by an in-process handler."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


DEMO_QUERY = "How do I add two numbers?"

HELLO_STREAM = ndjson(
    {"response": "Hel", "done": False},
    {"response": "lo", "done": False},
    {"response": "", "done": True},
)
