"""Entry point: python -m sseframe [PATH | URL | -]

Prints one JSON object per parsed message on stdout.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import TextIO

import anyio
import httpx
import structlog

from .config import SSEFrameConfig
from .decoder import SSEDecodeError
from .logging_config import setup_logging
from .parser import SSEMessage
from .sources import aiter_http_chunks, iter_file_chunks
from .stream import iter_messages, transform_stream

log = structlog.get_logger()


def _emit(message: SSEMessage, out: TextIO) -> None:
    out.write(json.dumps(message, ensure_ascii=False) + "\n")
    out.flush()


def parse_file(path: str, config: SSEFrameConfig, flush: bool, out: TextIO) -> int:
    """Parse a file (or stdin for "-"), returning the number of messages printed."""
    count = 0
    source = sys.stdin.buffer if path == "-" else open(path, "rb")  # noqa: SIM115
    try:
        chunks = iter_file_chunks(source, config.chunk_size)
        for message in iter_messages(chunks, config.join_data_with_newline, flush=flush):
            _emit(message, out)
            count += 1
    finally:
        if source is not sys.stdin.buffer:
            source.close()
    return count


async def parse_url(
    url: str,
    config: SSEFrameConfig,
    flush: bool,
    out: TextIO,
    http_client: httpx.AsyncClient | None = None,
) -> int:
    """Stream an HTTP SSE endpoint, returning the number of messages printed."""
    count = 0
    client = http_client or httpx.AsyncClient(timeout=config.http_timeout)
    try:
        chunks = aiter_http_chunks(client, url, chunk_size=config.chunk_size)
        async for message in transform_stream(chunks, config.join_data_with_newline, flush=flush):
            _emit(message, out)
            count += 1
    finally:
        if http_client is None:
            await client.aclose()
    return count


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Parse a Server-Sent Events stream into JSON lines")
    parser.add_argument("source", nargs="?", default="-", help="File path, http(s) URL, or - for stdin (default)")
    parser.add_argument("--newlines", action="store_true", help="Join repeated data lines with a newline")
    parser.add_argument("--flush", action="store_true", help="Also emit an unterminated final message")
    parser.add_argument("--chunk-size", type=_positive_int, default=None, help="Read size in bytes (default: 65536)")
    parser.add_argument("--log-level", default=None, help="Log level (default: INFO)")
    parser.add_argument("--log-dir", default=None, help="Also write JSON logs to this directory")
    args = parser.parse_args(argv)

    config = SSEFrameConfig()
    if args.newlines:
        config.join_data_with_newline = True
    if args.chunk_size is not None:
        config.chunk_size = args.chunk_size
    if args.log_level:
        config.log_level = args.log_level
    if args.log_dir:
        config.log_dir = args.log_dir

    setup_logging(config.log_dir, config.log_level)

    try:
        if args.source.startswith(("http://", "https://")):
            count = anyio.run(parse_url, args.source, config, args.flush, sys.stdout)
        else:
            count = parse_file(args.source, config, args.flush, sys.stdout)
    except SSEDecodeError as exc:
        log.error("sse_decode_failed", source=args.source, offset=exc.offset, reason=exc.reason)
        return 1
    except httpx.HTTPError as exc:
        log.error("sse_fetch_failed", source=args.source, error=str(exc))
        return 1
    except OSError as exc:
        log.error("sse_source_unreadable", source=args.source, error=str(exc))
        return 1

    log.info("sse_parse_complete", source=args.source, messages=count)
    return 0


if __name__ == "__main__":
    sys.exit(main())
