"""
Reassembly of the streamed generation response.

Turns the raw NDJSON byte stream from the generation service into a growing
answer text. Network chunks are not aligned with records or with UTF-8
character boundaries, so bytes go through an incremental decoder and a
pending-line buffer before any JSON parsing.

Dependencies: codecs, json
System role: Token stream consumer for chat
"""

import codecs
import json
import logging
from collections.abc import AsyncIterable, AsyncIterator
from enum import Enum

logger = logging.getLogger(__name__)


class ReassemblerState(str, Enum):
    """Line framing state."""

    AWAITING_LINE = "awaiting_line"
    HAVE_PARTIAL_LINE = "have_partial_line"


class StreamReassembler:
    """
    Incremental NDJSON parser accumulating `response` deltas.

    Feed raw byte chunks in arrival order; each call returns the accumulated
    text after every record that added to it. Lines that are not valid JSON
    objects are skipped. `done` records are noted but do not end the stream;
    only `finish()` does.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._pending = ""
        self._text = ""
        self._finished = False
        self.state = ReassemblerState.AWAITING_LINE
        self.done_seen = False
        self.skipped_lines = 0

    @property
    def text(self) -> str:
        """Accumulated answer text so far."""
        return self._text

    def feed(self, chunk: bytes) -> list[str]:
        """
        Consume one chunk of bytes.

        Args:
            chunk: Bytes exactly as delivered by the transport

        Returns:
            list[str]: Accumulated text after each update, in order
        """
        if self._finished:
            raise RuntimeError("StreamReassembler already finished")
        return self._consume(self._decoder.decode(chunk))

    def finish(self) -> list[str]:
        """
        Mark end of stream.

        Flushes the decoder and parses a final unterminated line, if any.

        Returns:
            list[str]: Accumulated text after each remaining update
        """
        if self._finished:
            return []
        updates = self._consume(self._decoder.decode(b"", final=True))
        self._finished = True

        if self._pending:
            line, self._pending = self._pending, ""
            self.state = ReassemblerState.AWAITING_LINE
            if self._apply_line(line):
                updates.append(self._text)
        return updates

    def _consume(self, decoded: str) -> list[str]:
        updates: list[str] = []
        if not decoded:
            return updates

        buffer = self._pending + decoded
        *lines, self._pending = buffer.split("\n")
        self.state = (
            ReassemblerState.HAVE_PARTIAL_LINE if self._pending else ReassemblerState.AWAITING_LINE
        )

        for line in lines:
            if self._apply_line(line):
                updates.append(self._text)
        return updates

    def _apply_line(self, line: str) -> bool:
        """Parse one complete line; return True when the text grew."""
        line = line.strip()
        if not line:
            return False

        try:
            record = json.loads(line)
        except json.JSONDecodeError:
            self.skipped_lines += 1
            logger.debug("Skipping unparseable stream line", extra={"line_length": len(line)})
            return False

        if not isinstance(record, dict):
            self.skipped_lines += 1
            return False

        if record.get("done"):
            self.done_seen = True

        delta = record.get("response")
        if isinstance(delta, str) and delta:
            self._text += delta
            return True
        return False


async def reassemble(chunks: AsyncIterable[bytes]) -> AsyncIterator[str]:
    """
    Drive a StreamReassembler over an async byte stream.

    Args:
        chunks: Raw byte chunks, e.g. GenerationStream.aiter_bytes()

    Yields:
        str: Full accumulated text after every update
    """
    reassembler = StreamReassembler()
    async for chunk in chunks:
        for text in reassembler.feed(chunk):
            yield text
    for text in reassembler.finish():
        yield text
