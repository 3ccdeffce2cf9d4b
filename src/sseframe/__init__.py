"""Incremental Server-Sent Events framing: raw byte chunks in, message records out."""

from .decoder import SSEDecodeError, UTF8Decoder
from .framer import SSEFramer
from .parser import SSEMessage, format_message, parse_frame
from .state_machine import InvalidTransition, TransformPhase
from .stream import SSEInputSink, SSEStream, StreamClosedError, iter_messages, transform_stream
from .transform import SSEStreamTransform

__version__ = "0.1.0"

__all__ = [
    "SSEDecodeError",
    "UTF8Decoder",
    "SSEFramer",
    "SSEMessage",
    "format_message",
    "parse_frame",
    "InvalidTransition",
    "TransformPhase",
    "SSEInputSink",
    "SSEStream",
    "StreamClosedError",
    "iter_messages",
    "transform_stream",
    "SSEStreamTransform",
]
