"""
Chat domain models and schemas.

Request schema for chat operations and the conversation turn that grows while
an answer streams in.

Dependencies: pydantic
System role: Chat API contracts
"""

from typing import Literal

from pydantic import AliasChoices, BaseModel, Field


class ChatMessage(BaseModel):
    """Single chat message sent by the client."""

    role: Literal["user", "assistant"] = Field(description="Message role: 'user' or 'assistant'")
    content: str = Field(description="Message content")


class ChatRequest(BaseModel):
    """Request schema for chat messages."""

    messages: list[ChatMessage] | None = Field(
        default=None, description="Conversation so far; the last one is the question"
    )
    context_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("context_name", "contextName"),
        description="Context to ground the answer in",
    )


class GroundingSource(BaseModel):
    """Fragment snapshot attached to an assistant turn."""

    source: str
    text: str


class ConversationTurn(BaseModel):
    """
    One side of a chat exchange.

    Attributes:
        role: 'user' or 'assistant'
        content: Message text; append-only while the assistant stream is active
        grounding_snapshot: Fragments that grounded an assistant answer
    """

    role: Literal["user", "assistant"]
    content: str = ""
    grounding_snapshot: list[GroundingSource] | None = None
