"""
Ollama generation client.

Requests a streamed completion from /api/generate and hands back the open
response as soon as the headers confirm success. The body is NDJSON and is
left to the caller (see repo_llama.core.stream_reassembler).

Dependencies: httpx, repo_llama.boundary.ollama.base
System role: Token stream source for chat
"""

import logging
from collections.abc import AsyncIterator

import httpx

from .base import OllamaHttpClient, remote_error, transport_error

logger = logging.getLogger(__name__)


class GenerationStream:
    """Open streamed response from the generation service."""

    def __init__(self, response: httpx.Response, url: str) -> None:
        self._response = response
        self._url = url

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def media_type(self) -> str:
        return self._response.headers.get("content-type", "application/x-ndjson")

    async def aiter_bytes(self) -> AsyncIterator[bytes]:
        """
        Yield raw body chunks as the transport delivers them.

        Raises:
            TransportError: When the connection fails or times out mid-stream
        """
        try:
            async for chunk in self._response.aiter_bytes():
                if chunk:
                    yield chunk
        except httpx.HTTPError as e:
            raise transport_error(e, self._url) from e

    async def aclose(self) -> None:
        await self._response.aclose()

    async def __aenter__(self) -> "GenerationStream":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


class OllamaGenerationClient(OllamaHttpClient):
    """Streaming client for Ollama's /api/generate endpoint."""

    def __init__(
        self,
        base_url: str = "http://localhost:11434",
        model: str = "llama3.1",
        timeout: float = 120.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(base_url=base_url, model=model, timeout=timeout, client=client)

    async def generate(self, prompt: str) -> GenerationStream:
        """
        Start a streamed generation.

        Args:
            prompt: Fully assembled prompt

        Returns:
            GenerationStream: Open response; the caller must close it

        Raises:
            TransportError: Connection failure or timeout before headers
            RemoteError: Non-success status (raised before any stream is returned)
        """
        url = self._url("/api/generate")
        request = self._client.build_request(
            "POST",
            url,
            json={"model": self._model, "prompt": prompt, "stream": True},
        )

        try:
            response = await self._client.send(request, stream=True)
        except httpx.HTTPError as e:
            raise transport_error(e, url) from e

        if not response.is_success:
            try:
                body = (await response.aread()).decode("utf-8", errors="replace")
            except httpx.HTTPError:
                body = ""
            finally:
                await response.aclose()
            logger.error(
                "Generation request rejected",
                extra={"status_code": response.status_code, "model": self._model},
            )
            raise remote_error(response, body)

        logger.info("Generation stream opened", extra={"model": self._model, "prompt_length": len(prompt)})
        return GenerationStream(response, url)
