"""Bytes-to-messages transform: decoder, framer and field parser in one object.

Synchronous and push-driven. Each ``feed()`` call decodes the chunk,
extracts every frame it completed and returns the non-empty records in
order. Content left without a terminating blank line when the transform
is closed is discarded; ``flush()`` is the explicit way to recover it.
"""

from __future__ import annotations

import uuid

import structlog

from .decoder import SSEDecodeError, UTF8Decoder
from .framer import SSEFramer
from .parser import SSEMessage, parse_frame
from .state_machine import TransformPhase, transition

log = structlog.get_logger()

Chunk = bytes | bytearray | memoryview | str


class SSEStreamTransform:
    """Converts an SSE byte stream into message records, one chunk at a time."""

    def __init__(
        self,
        join_data_with_newline: bool = False,
        stream_id: str | None = None,
    ) -> None:
        self.join_data_with_newline = join_data_with_newline
        self.stream_id = stream_id or uuid.uuid4().hex[:12]
        self.decoder = UTF8Decoder()
        self.framer = SSEFramer()
        self.phase = TransformPhase.IDLE
        self.messages_emitted = 0
        self.frames_skipped = 0

    @property
    def closed(self) -> bool:
        return self.phase == TransformPhase.CLOSED

    def feed(self, chunk: Chunk) -> list[SSEMessage]:
        """Process one input chunk, returning the records it completed.

        Raises:
            SSEDecodeError: If the chunk contains invalid UTF-8. The transform
                is closed first, so nothing decoded after the corruption is
                ever emitted.
            InvalidTransition: If the transform has been closed.
        """
        if self.closed:
            transition(self.phase, TransformPhase.ACCUMULATING, self.stream_id, trigger="feed")
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8")

        text = self._decode(chunk)
        messages = [m for m in map(self._parse, self.framer.feed(text)) if m]
        self.messages_emitted += len(messages)

        busy = bool(self.framer.buffered) or self.decoder.pending
        target = TransformPhase.ACCUMULATING if busy else TransformPhase.IDLE
        self.phase = transition(self.phase, target, self.stream_id, trigger="feed")
        return messages

    def flush(self) -> SSEMessage | None:
        """Parse whatever is still buffered as a final frame.

        Not part of the default close path. The transform stays open, so
        more input may follow.
        """
        if self.closed:
            return None
        self._finish_decoder()
        remainder = self.framer.take_remainder()
        self.phase = transition(self.phase, TransformPhase.IDLE, self.stream_id, trigger="flush")
        message = self._parse(remainder) if remainder else {}
        if not message:
            return None
        self.messages_emitted += 1
        return message

    def close(self) -> None:
        """End of input. Partial content is dropped without being parsed."""
        self._release("close")

    def abort(self) -> None:
        """Upstream failure. Same release as close(), logged differently."""
        self._release("abort")

    def _decode(self, chunk: bytes | bytearray | memoryview) -> str:
        try:
            return self.decoder.decode(chunk)
        except SSEDecodeError:
            self._release("decode_error")
            raise

    def _finish_decoder(self) -> None:
        try:
            self.decoder.finish()
        except SSEDecodeError:
            self._release("decode_error")
            raise

    def _parse(self, frame: str) -> SSEMessage:
        message = parse_frame(frame, self.join_data_with_newline)
        if not message:
            self.frames_skipped += 1
            log.debug("sse_frame_skipped", stream_id=self.stream_id, frame_len=len(frame))
        return message

    def _release(self, trigger: str) -> None:
        if self.closed:
            return
        leftover = len(self.framer.buffered)
        if leftover or self.decoder.pending:
            log.debug(
                "sse_partial_discarded",
                stream_id=self.stream_id,
                trigger=trigger,
                buffered_chars=leftover,
                decoder_pending=self.decoder.pending,
            )
        self.framer.clear()
        self.decoder.reset()
        self.phase = transition(self.phase, TransformPhase.CLOSED, self.stream_id, trigger=trigger)
        log.debug(
            "sse_stream_complete",
            stream_id=self.stream_id,
            trigger=trigger,
            messages=self.messages_emitted,
            frames_skipped=self.frames_skipped,
        )
