"""
Shared HTTP plumbing for the Ollama clients.

Owns the httpx.AsyncClient and translates httpx failures into the domain
error taxonomy.

Dependencies: httpx, repo_llama.core.exceptions
System role: External service transport
"""

import logging

import httpx

from repo_llama.core.exceptions import RemoteError, TransportError

logger = logging.getLogger(__name__)


class OllamaHttpClient:
    """Base class holding a (possibly shared) async HTTP client."""

    def __init__(
        self,
        base_url: str,
        model: str,
        timeout: float = 120.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Ollama server URL, e.g. http://localhost:11434
            model: Model name sent with every request
            timeout: Per-request timeout in seconds
            client: Optional pre-built AsyncClient (tests inject a MockTransport here)
        """
        if not model:
            raise ValueError("model cannot be empty")

        self._base_url = base_url.rstrip("/")
        self._model = model
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    @property
    def model(self) -> str:
        return self._model

    def _url(self, path: str) -> str:
        return f"{self._base_url}{path}"

    async def aclose(self) -> None:
        """Close the underlying client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def transport_error(exc: httpx.HTTPError, url: str) -> TransportError:
    """Wrap an httpx transport failure (including timeouts)."""
    if isinstance(exc, httpx.TimeoutException):
        message = f"Timed out talking to Ollama: {type(exc).__name__}"
    else:
        message = f"Failed to reach Ollama: {exc}"
    return TransportError(message, url=url, details={"error_type": type(exc).__name__})


def remote_error(response: httpx.Response, body: str = "") -> RemoteError:
    """Build a RemoteError carrying the service's status text."""
    status_text = response.reason_phrase or body.strip()[:200]
    return RemoteError(
        f"Ollama API error: {status_text}",
        status_code=response.status_code,
        status_text=status_text,
        details={"body": body.strip()[:200]} if body.strip() else None,
    )
