"""Field parsing for a single SSE frame.

A frame is a run of ``key: value`` lines:

    event: update
    data: first line
    data: second line

The first colon on a line splits key from value and both sides are
whitespace-trimmed. Lines without a colon are ignored. Repeated ``data``
lines are concatenated; any other repeated key keeps its last value.
"""

from __future__ import annotations

SSEMessage = dict[str, str]

DATA_FIELD = "data"


def parse_line(line: str) -> tuple[str, str] | None:
    """Split one line into (key, value), or None when it has no colon."""
    key, sep, value = line.partition(":")
    if not sep:
        return None
    return key.strip(), value.strip()


def parse_frame(frame: str, join_data_with_newline: bool = False) -> SSEMessage:
    """Fold the lines of a frame into a message record.

    A line starting with ":" has an empty key and is stored under "".
    """
    message: SSEMessage = {}
    separator = "\n" if join_data_with_newline else ""

    for line in frame.split("\n"):
        parsed = parse_line(line)
        if parsed is None:
            continue
        key, value = parsed
        if key == DATA_FIELD and key in message:
            message[key] += separator + value
        else:
            message[key] = value

    return message


def format_message(message: SSEMessage) -> bytes:
    """Serialize a record back to SSE wire format.

    Multi-line data is written as one ``data:`` line per line of text.
    """
    lines: list[str] = []
    for key, value in message.items():
        if key == DATA_FIELD:
            for data_line in value.split("\n"):
                lines.append(f"data: {data_line}")
        else:
            lines.append(f"{key}: {value}")
    lines.append("")  # blank line terminates the message
    return ("\n".join(lines) + "\n").encode()
