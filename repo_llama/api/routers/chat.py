"""Chat API endpoints.

Routes:
- POST /chat - Grounded answer as the raw NDJSON model stream, with an X-Sources header
- POST /chat/stream - Grounded answer as Server-Sent Events (SSE) with accumulated text

Dependencies: repo_llama.application.services.chat_service
System role: Chat messaging HTTP API with streaming support
"""

import json
import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from repo_llama.api.deps import get_chat_service
from repo_llama.api.error_handling import classify_error, handle_api_errors
from repo_llama.application.services import ChatService
from repo_llama.core.exceptions import RepoLlamaException
from repo_llama.models.chat import ChatRequest
from repo_llama.models.streaming import StreamEvent, StreamEventType

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])

SOURCES_HEADER = "X-Sources"


@router.post("")
@handle_api_errors
async def chat(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> StreamingResponse:
    """
    Answer the last message, grounded in the context.

    The sources manifest goes out in the X-Sources header before the body;
    the body is the model's NDJSON stream passed through untouched.

    Raises:
        HTTPException(400): Missing messages or context name
        HTTPException(404): Unknown context
        HTTPException(502): Embedding or generation service failure
    """
    chat_stream = await chat_service.open_chat(request.messages, request.context_name)

    async def body() -> AsyncGenerator[bytes, None]:
        try:
            async for chunk in chat_stream.stream.aiter_bytes():
                yield chunk
        except RepoLlamaException as e:
            # headers are already sent; the stream just ends
            logger.error(
                f"{__name__}:chat - stream aborted",
                extra={"error_type": type(e).__name__, "error_msg": str(e)},
            )
        finally:
            await chat_stream.stream.aclose()

    return StreamingResponse(
        body(),
        media_type="application/x-ndjson",
        headers={SOURCES_HEADER: json.dumps(chat_stream.sources_manifest)},
    )


@router.post("/stream")
async def chat_stream(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> StreamingResponse:
    """Stream a grounded answer using Server-Sent Events (SSE).

    SSE Format:
        event: context
        data: {"sources": [...], "chunks": [...]}

        event: token
        data: {"text": "<accumulated answer>", "index": 0}

        event: complete
        data: {"full_answer": "...", "done": true, "turn": {"role": "assistant", ...}}

        event: error
        data: {"code": "...", "message": "..."}
    """
    logger.info(f"{__name__}:chat_stream - START context={request.context_name}")

    async def event_generator() -> AsyncGenerator[str, None]:
        """Generate SSE events from chat stream."""
        try:
            async for event in chat_service.stream_events(request.messages, request.context_name):
                yield event.to_sse()
            logger.info(f"{__name__}:chat_stream - Stream completed")

        except RepoLlamaException as e:
            _, code = classify_error(e)
            logger.error(f"{__name__}:chat_stream - {type(e).__name__}: {e}")
            yield StreamEvent(
                event=StreamEventType.ERROR, data={"code": code, "message": e.message}
            ).to_sse()

        except Exception as e:
            logger.exception(f"{__name__}:chat_stream - {type(e).__name__}: {e}")
            yield StreamEvent(
                event=StreamEventType.ERROR, data={"code": "PROCESSING_ERROR", "message": str(e)}
            ).to_sse()

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",  # Disable nginx buffering
        },
    )
