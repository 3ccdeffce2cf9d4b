"""Incremental UTF-8 decoding for chunked byte streams.

A multi-byte character split across two chunks is held back until the
rest of its bytes arrive, so callers can feed arbitrary slices.
"""

from __future__ import annotations

import codecs


class SSEDecodeError(ValueError):
    """Raised when the byte stream is not valid UTF-8."""

    def __init__(self, reason: str, offset: int) -> None:
        self.reason = reason
        self.offset = offset
        super().__init__(f"Invalid UTF-8 at stream offset {offset}: {reason}")


class UTF8Decoder:
    """Stateful bytes -> str decoder that carries partial sequences between calls."""

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="strict")
        self._consumed = 0

    @property
    def pending(self) -> bool:
        """Whether an incomplete multi-byte sequence is being held back."""
        buffered, _ = self._decoder.getstate()
        return bool(buffered)

    def decode(self, chunk: bytes | bytearray | memoryview) -> str:
        return self._decode(bytes(chunk), final=False)

    def finish(self) -> str:
        """Decode with end-of-input semantics; a dangling partial sequence raises."""
        return self._decode(b"", final=True)

    def reset(self) -> None:
        """Drop any held-back bytes."""
        self._decoder.reset()

    def _decode(self, data: bytes, final: bool) -> str:
        buffered, _ = self._decoder.getstate()
        start = self._consumed - len(buffered)
        self._consumed += len(data)
        try:
            return self._decoder.decode(data, final=final)
        except UnicodeDecodeError as exc:
            # the rejected chunk is dropped whole; offsets stay stream-relative
            self._decoder.reset()
            raise SSEDecodeError(exc.reason, start + exc.start) from exc
