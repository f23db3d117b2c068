"""Pydantic domain models and API schemas."""

from repo_llama.models.chat import ChatMessage, ChatRequest, ConversationTurn, GroundingSource
from repo_llama.models.context import ContextInfo, DeleteContextRequest, DeleteContextResponse
from repo_llama.models.fragment import Collection, Fragment, ScoredFragment
from repo_llama.models.ingest import IngestRequest, IngestResponse
from repo_llama.models.search import SearchRequest, SearchResponse
from repo_llama.models.streaming import StreamEvent, StreamEventType

__all__ = [
    "ChatMessage",
    "ChatRequest",
    "Collection",
    "ContextInfo",
    "ConversationTurn",
    "DeleteContextRequest",
    "DeleteContextResponse",
    "Fragment",
    "GroundingSource",
    "IngestRequest",
    "IngestResponse",
    "ScoredFragment",
    "SearchRequest",
    "SearchResponse",
    "StreamEvent",
    "StreamEventType",
]
