"""Byte sources for feeding the transform: files, stdin and HTTP responses."""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator
from typing import BinaryIO

import httpx
import structlog

log = structlog.get_logger()

DEFAULT_CHUNK_SIZE = 65_536


def iter_file_chunks(stream: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
    """Read a binary file object in fixed-size chunks until EOF."""
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            return
        yield chunk


async def aiter_http_chunks(
    client: httpx.AsyncClient,
    url: str,
    headers: dict[str, str] | None = None,
    chunk_size: int | None = None,
) -> AsyncIterator[bytes]:
    """Stream the body of a GET request as raw bytes.

    Raises:
        httpx.HTTPStatusError: If the server answers with a non-2xx status.
    """
    request_headers = {"accept": "text/event-stream", "cache-control": "no-cache"}
    if headers:
        request_headers.update(headers)

    async with client.stream("GET", url, headers=request_headers) as response:
        response.raise_for_status()
        content_type = response.headers.get("content-type", "")
        if "text/event-stream" not in content_type:
            log.warning("sse_unexpected_content_type", url=url, content_type=content_type)
        total_bytes = 0
        async for chunk in response.aiter_bytes(chunk_size):
            total_bytes += len(chunk)
            yield chunk
        log.debug("sse_http_stream_complete", url=url, total_bytes=total_bytes)
