"""
Test suite for the chat API endpoints.

Tests POST /chat (NDJSON pass-through with X-Sources) and POST /chat/stream
(SSE) with the generation service mocked at the HTTP layer.

System role: Verification of chat HTTP API endpoints
"""

import json

import httpx
from fastapi.testclient import TestClient

from tests.helpers import DEMO_QUERY, HELLO_STREAM


def chat_payload(context_name: str | None = "demo", content: str = DEMO_QUERY) -> dict:
    payload = {"messages": [{"role": "user", "content": content}]}
    if context_name is not None:
        payload["contextName"] = context_name
    return payload


def parse_sse(body: str) -> list[tuple[str, dict]]:
    events = []
    for frame in body.strip().split("\n\n"):
        lines = dict(line.split(": ", 1) for line in frame.splitlines())
        events.append((lines["event"], json.loads(lines["data"])))
    return events


class TestChatEndpoint:
    """Test suite for POST /api/v1/chat."""

    def test_streams_model_ndjson_with_sources_header(self, client: TestClient, generation_handler) -> None:
        # Act
        response = client.post("/api/v1/chat", json=chat_payload())

        # Assert
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/x-ndjson")
        assert json.loads(response.headers["X-Sources"]) == [{"source": "a.ts"}]
        assert response.content == HELLO_STREAM

        [prompt] = generation_handler.prompts
        assert "File: a.ts" in prompt
        assert DEMO_QUERY in prompt

    def test_missing_context_is_bad_request(self, client: TestClient, generation_handler) -> None:
        response = client.post("/api/v1/chat", json=chat_payload(context_name=None))

        assert response.status_code == 400
        assert generation_handler.prompts == []

    def test_missing_messages_is_bad_request(self, client: TestClient) -> None:
        response = client.post("/api/v1/chat", json={"contextName": "demo"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Messages are required"

    def test_unknown_context_is_not_found(self, client: TestClient, generation_handler) -> None:
        response = client.post("/api/v1/chat", json=chat_payload(context_name="ghost"))

        assert response.status_code == 404
        assert generation_handler.prompts == []

    def test_generation_failure_is_bad_gateway(self, client: TestClient, generation_handler) -> None:
        generation_handler.respond = lambda request: httpx.Response(500, text="model crashed")

        response = client.post("/api/v1/chat", json=chat_payload())

        assert response.status_code == 502
        assert "Ollama API error" in response.json()["detail"]


class TestChatStreamEndpoint:
    """Test suite for POST /api/v1/chat/stream."""

    def test_emits_context_tokens_and_complete(self, client: TestClient) -> None:
        response = client.post("/api/v1/chat/stream", json=chat_payload())

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")

        events = parse_sse(response.text)
        assert [name for name, _ in events] == ["context", "token", "token", "complete"]
        assert events[0][1]["sources"] == [{"source": "a.ts"}]
        assert [data["text"] for name, data in events if name == "token"] == ["Hel", "Hello"]
        complete = events[-1][1]
        assert (complete["full_answer"], complete["done"]) == ("Hello", True)
        assert complete["turn"]["role"] == "assistant"
        assert complete["turn"]["content"] == "Hello"
        assert complete["turn"]["grounding_snapshot"][0]["source"] == "a.ts"

    def test_errors_become_error_events(self, client: TestClient) -> None:
        response = client.post("/api/v1/chat/stream", json=chat_payload(context_name="ghost"))

        assert response.status_code == 200
        [(name, data)] = parse_sse(response.text)
        assert name == "error"
        assert data == {"code": "NOT_FOUND", "message": "Context not found: ghost"}
