"""Blank-line framing over an accumulating text buffer."""

from __future__ import annotations

from dataclasses import dataclass

FRAME_DELIMITER = "\n\n"


@dataclass
class SSEFramer:
    """Incremental framer that splits buffered text into complete frames.

    Frames are cut at the leftmost delimiter first, so they come out in the
    order their terminating blank line appears. Anything after the last
    delimiter stays buffered for the next call.
    """

    _buffer: str = ""

    @property
    def buffered(self) -> str:
        return self._buffer

    def feed(self, text: str) -> list[str]:
        """Append text, return every frame it completed (trimmed)."""
        self._buffer += text
        frames: list[str] = []

        while FRAME_DELIMITER in self._buffer:
            end = self._buffer.index(FRAME_DELIMITER) + len(FRAME_DELIMITER)
            frames.append(self._buffer[:end].strip())
            self._buffer = self._buffer[end:]

        return frames

    def take_remainder(self) -> str:
        """Remove and return the unterminated tail, trimmed."""
        remainder, self._buffer = self._buffer.strip(), ""
        return remainder

    def clear(self) -> None:
        self._buffer = ""
