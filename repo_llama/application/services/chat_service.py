"""
Chat service for grounded Q&A over a context.

Orchestrates the chat flow: retrieval for the last user message, prompt
assembly, streamed generation. Offers the raw NDJSON stream (with its source
manifest) and server-sent events carrying the growing answer and the final
assistant turn.

Dependencies: repo_llama.application.services.retrieval_service, repo_llama.boundary.ollama, repo_llama.core
System role: Chat service orchestration layer
"""

import logging
from collections.abc import AsyncGenerator, Sequence
from dataclasses import dataclass

from repo_llama.application.services.retrieval_service import RetrievalService
from repo_llama.boundary.ollama import GenerationStream, OllamaGenerationClient
from repo_llama.core.exceptions import ValidationError
from repo_llama.core.prompt_builder import build_prompt
from repo_llama.core.stream_reassembler import StreamReassembler
from repo_llama.models.chat import ChatMessage, ConversationTurn, GroundingSource
from repo_llama.models.fragment import ScoredFragment
from repo_llama.models.streaming import StreamEvent, StreamEventType

logger = logging.getLogger(__name__)


@dataclass
class ChatStream:
    """Open answer stream plus the fragments that grounded it."""

    sources: list[ScoredFragment]
    stream: GenerationStream

    @property
    def sources_manifest(self) -> list[dict[str, str]]:
        """Out-of-band provenance: one {source} per grounding fragment."""
        return [{"source": fragment.source} for fragment in self.sources]

    def grounding_snapshot(self) -> list[GroundingSource]:
        return [GroundingSource(source=f.source, text=f.text) for f in self.sources]


def last_user_query(messages: Sequence[ChatMessage] | None) -> str:
    """
    Extract the question from a conversation.

    Raises:
        ValidationError: When there are no messages or the last one is empty
    """
    if not messages:
        raise ValidationError("Messages are required", field="messages")
    query = messages[-1].content
    if not query or not query.strip():
        raise ValidationError("Last message has no content", field="messages")
    return query


class ChatService:
    """
    Chat service for grounded conversational Q&A.

    Retrieval always runs before generation; if it fails the request fails,
    there is no ungrounded fallback.
    """

    def __init__(
        self,
        retrieval: RetrievalService,
        generator: OllamaGenerationClient,
    ) -> None:
        """
        Initialize chat service.

        Args:
            retrieval: Retrieval service for grounding fragments
            generator: Streaming generation client
        """
        self.retrieval = retrieval
        self.generator = generator

    async def open_chat(
        self,
        messages: Sequence[ChatMessage] | None,
        context_name: str | None,
    ) -> ChatStream:
        """
        Retrieve grounding fragments and start the generation stream.

        Args:
            messages: Conversation; the last message is the question
            context_name: Context to ground the answer in

        Returns:
            ChatStream: Sources and the open NDJSON stream (caller closes it)
        """
        query = last_user_query(messages)
        if not context_name:
            raise ValidationError("Context name is required", field="context_name")

        logger.info(f"{__name__}:open_chat - START context={context_name}")
        sources = await self.retrieval.search(query, context_name)
        prompt = build_prompt(query, sources)
        stream = await self.generator.generate(prompt)
        logger.info(
            f"{__name__}:open_chat - stream opened",
            extra={"context_name": context_name, "sources": len(sources), "prompt_length": len(prompt)},
        )
        return ChatStream(sources=sources, stream=stream)

    async def stream_events(
        self,
        messages: Sequence[ChatMessage] | None,
        context_name: str | None,
    ) -> AsyncGenerator[StreamEvent, None]:
        """
        Stream chat as server-sent events.

        Flow:
        1. context event with the grounding sources
        2. token event with the accumulated text after every update
        3. complete event with the final answer and the frozen assistant turn

        Yields:
            StreamEvent: Context, token and complete events
        """
        chat = await self.open_chat(messages, context_name)
        yield StreamEvent(
            event=StreamEventType.CONTEXT,
            data={
                "sources": chat.sources_manifest,
                "chunks": [
                    {"source": f.source, "text": f.text, "score": f.score} for f in chat.sources
                ],
            },
        )

        reassembler = StreamReassembler()
        index = 0
        async with chat.stream:
            async for chunk in chat.stream.aiter_bytes():
                for text in reassembler.feed(chunk):
                    yield StreamEvent(event=StreamEventType.TOKEN, data={"text": text, "index": index})
                    index += 1
            for text in reassembler.finish():
                yield StreamEvent(event=StreamEventType.TOKEN, data={"text": text, "index": index})
                index += 1

        turn = ConversationTurn(
            role="assistant", content=reassembler.text, grounding_snapshot=chat.grounding_snapshot()
        )
        logger.info(
            f"{__name__}:stream_events - END",
            extra={"updates": index, "skipped_lines": reassembler.skipped_lines},
        )
        yield StreamEvent(
            event=StreamEventType.COMPLETE,
            data={
                "full_answer": reassembler.text,
                "done": reassembler.done_seen,
                "turn": turn.model_dump(),
            },
        )
