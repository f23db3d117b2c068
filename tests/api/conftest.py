"""
Fixtures for API tests.

The full app is built with create_app(); service dependencies are overridden
to use a temp fragment store, an in-memory embedder and a mocked Ollama
generation endpoint.
"""

import json

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from repo_llama.api.deps import (
    get_chat_service,
    get_context_service,
    get_ingestion_service,
    get_retrieval_service,
)
from repo_llama.api.main import create_app
from repo_llama.application.services import (
    ChatService,
    ContextService,
    IngestionService,
    RetrievalService,
)
from repo_llama.boundary.ollama import OllamaGenerationClient
from repo_llama.boundary.store import FragmentStore
from repo_llama.configs.ingestion import IngestionSettings
from tests.helpers import DEMO_QUERY, HELLO_STREAM, FakeEmbeddingClient, mock_async_client



@pytest.fixture
def embedder() -> FakeEmbeddingClient:
    return FakeEmbeddingClient(vectors={DEMO_QUERY: [0.9, 0.1]})


@pytest.fixture
def generation_handler():
    """Handler for /api/generate; tests may replace it via `generation_handler.respond`."""

    class Handler:
        def __init__(self) -> None:
            self.prompts: list[str] = []
            self.respond = lambda request: httpx.Response(
                200, headers={"content-type": "application/x-ndjson"}, content=HELLO_STREAM
            )

        def __call__(self, request: httpx.Request) -> httpx.Response:
            self.prompts.append(json.loads(request.content)["prompt"])
            return self.respond(request)

    return Handler()


@pytest.fixture
def app(demo_store: FragmentStore, embedder: FakeEmbeddingClient, generation_handler) -> FastAPI:
    """Create the application wired to test doubles."""
    app = create_app()
    generator = OllamaGenerationClient(
        base_url="http://ollama.test", client=mock_async_client(generation_handler)
    )

    def retrieval() -> RetrievalService:
        return RetrievalService(demo_store, embedder, top_k=1)

    app.dependency_overrides[get_retrieval_service] = retrieval
    app.dependency_overrides[get_chat_service] = lambda: ChatService(retrieval(), generator)
    app.dependency_overrides[get_context_service] = lambda: ContextService(demo_store)
    app.dependency_overrides[get_ingestion_service] = lambda: IngestionService(
        demo_store, embedder, IngestionSettings(chunk_size=50, chunk_overlap=10)
    )
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Provide TestClient for the FastAPI app."""
    return TestClient(app)
