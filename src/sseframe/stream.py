"""Async push/pull adapters around SSEStreamTransform.

``SSEStream`` is a two-ended resource: bytes are written into its input
sink, message records are read from its output. The output is an anyio
memory object stream with a bounded buffer, so a slow consumer suspends
the writer instead of letting records pile up.

    async with SSEStream() as stream:
        async with anyio.create_task_group() as tg:
            tg.start_soon(pump, stream.input)
            async for message in stream.output:
                ...

For the common case of a single async byte iterator, ``transform_stream``
does the same thing without a second task.
"""

from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator
from types import TracebackType

import anyio
import structlog
from anyio.streams.memory import MemoryObjectReceiveStream, MemoryObjectSendStream

from .decoder import SSEDecodeError
from .parser import SSEMessage
from .transform import Chunk, SSEStreamTransform

log = structlog.get_logger()


class StreamClosedError(RuntimeError):
    """Raised when writing to a stream whose input or output side is closed."""


class SSEInputSink:
    """Writable end of an SSEStream. Owns the transform state."""

    def __init__(
        self,
        transform: SSEStreamTransform,
        send_stream: MemoryObjectSendStream[SSEMessage],
    ) -> None:
        self._transform = transform
        self._send = send_stream
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def write(self, chunk: Chunk) -> None:
        """Feed one chunk and deliver the records it completed.

        Suspends while the output buffer is full.

        Raises:
            StreamClosedError: If the input was closed or the reader went away.
            SSEDecodeError: If the chunk contains invalid UTF-8. The sink is
                aborted and the reader sees end of output.
        """
        if self._closed:
            raise StreamClosedError("Input side of the stream is closed")

        try:
            messages = self._transform.feed(chunk)
        except SSEDecodeError:
            await self.abort()
            raise

        for message in messages:
            try:
                await self._send.send(message)
            except (anyio.BrokenResourceError, anyio.ClosedResourceError) as exc:
                log.debug("sse_consumer_gone", stream_id=self._transform.stream_id)
                await self.abort()
                raise StreamClosedError("Output side of the stream is closed") from exc

    async def flush(self) -> None:
        """Deliver the unterminated tail as a final record, if it parses to one."""
        if self._closed:
            raise StreamClosedError("Input side of the stream is closed")
        try:
            message = self._transform.flush()
        except SSEDecodeError:
            await self.abort()
            raise
        if message:
            try:
                await self._send.send(message)
            except (anyio.BrokenResourceError, anyio.ClosedResourceError) as exc:
                await self.abort()
                raise StreamClosedError("Output side of the stream is closed") from exc

    async def close(self) -> None:
        """Signal end of input. The reader sees end of output once drained."""
        if self._closed:
            return
        self._closed = True
        self._transform.close()
        await self._send.aclose()

    async def abort(self) -> None:
        """Release state after an upstream failure, emitting nothing further."""
        if self._closed:
            return
        self._closed = True
        self._transform.abort()
        await self._send.aclose()

    async def __aenter__(self) -> SSEInputSink:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            await self.close()
        else:
            await self.abort()


class SSEStream:
    """Paired input sink and output source sharing one transform."""

    def __init__(
        self,
        join_data_with_newline: bool = False,
        max_buffered_messages: int = 1,
        stream_id: str | None = None,
    ) -> None:
        self.transform = SSEStreamTransform(join_data_with_newline, stream_id=stream_id)
        send, receive = anyio.create_memory_object_stream[SSEMessage](max_buffered_messages)
        self.input = SSEInputSink(self.transform, send)
        self.output: MemoryObjectReceiveStream[SSEMessage] = receive

    async def __aenter__(self) -> SSEStream:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.input.__aexit__(exc_type, exc, tb)
        await self.output.aclose()


async def transform_stream(
    source: AsyncIterable[Chunk],
    join_data_with_newline: bool = False,
    flush: bool = False,
) -> AsyncIterator[SSEMessage]:
    """Yield records from an async byte source.

    The source is only pulled when the consumer asks for the next record.
    If the source raises, or the consumer stops early, the transform is
    aborted and any partial frame is dropped. The source is closed
    on every exit path when it has an ``aclose()`` method. With
    ``flush=True`` an unterminated final message is yielded once the source
    is exhausted.
    """
    transform = SSEStreamTransform(join_data_with_newline)
    try:
        async for chunk in source:
            for message in transform.feed(chunk):
                yield message
        if flush:
            tail = transform.flush()
            if tail:
                yield tail
    except BaseException:
        transform.abort()
        raise
    finally:
        aclose = getattr(source, "aclose", None)
        if aclose is not None:
            await aclose()
    transform.close()


def iter_messages(
    chunks: Iterable[Chunk],
    join_data_with_newline: bool = False,
    flush: bool = False,
) -> Iterator[SSEMessage]:
    """Synchronous counterpart of transform_stream()."""
    transform = SSEStreamTransform(join_data_with_newline)
    try:
        for chunk in chunks:
            yield from transform.feed(chunk)
        if flush:
            tail = transform.flush()
            if tail:
                yield tail
    except BaseException:
        transform.abort()
        raise
    finally:
        close = getattr(chunks, "close", None)
        if close is not None:
            close()
    transform.close()
