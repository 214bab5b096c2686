# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Incremental SSE line decoding and line classification.

SSELineDecoder turns raw body chunks into complete text lines. Multi-byte
UTF-8 sequences split across chunks are decoded correctly, and a partial
line is carried over to the next chunk.

classify_line() maps one line to a StreamEvent:

- ``data: [DONE]`` -> DoneEvent
- ``data: <text>`` -> ContentEvent(<text>)
- ``error: <text>`` -> ErrorEvent(<text>)
- anything else (blank lines, comments, ``event:`` / ``id:`` framing) -> ignored
"""

from __future__ import annotations

import codecs

from .events import ContentEvent, DoneEvent, ErrorEvent, StreamEvent

DATA_PREFIX = "data: "
ERROR_PREFIX = "error: "
DONE_SENTINEL = "[DONE]"


class SSELineDecoder:
    """
    Incremental bytes-to-lines decoder.

    Example:
        >>> decoder = SSELineDecoder()
        >>> decoder.feed(b"data: Hel")
        []
        >>> decoder.feed(b"lo\\ndata: [DO")
        ['data: Hello']
        >>> decoder.flush()
        ['data: [DO']
    """

    __slots__ = ("_buffer", "_decoder")

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""

    def feed(self, chunk: bytes) -> list[str]:
        """Decode ``chunk`` and return the lines it completed."""
        self._buffer += self._decoder.decode(chunk)
        if "\n" not in self._buffer:
            return []
        *lines, self._buffer = self._buffer.split("\n")
        return [line.rstrip("\r") for line in lines]

    def flush(self) -> list[str]:
        """Return the trailing fragment, if any, once the body has ended."""
        self._buffer += self._decoder.decode(b"", final=True)
        rest, self._buffer = self._buffer.rstrip("\r"), ""
        return [rest] if rest else []


def classify_line(line: str) -> StreamEvent | None:
    """
    Classify one SSE line.

    Args:
        line: A complete line without its terminator

    Returns:
        The event to emit, or None for lines that carry no event

    Example:
        >>> classify_line("data: hi")
        ContentEvent(content='hi', type='content')
        >>> classify_line("event: tool_use") is None
        True
    """
    if line.startswith(DATA_PREFIX):
        payload = line[len(DATA_PREFIX) :]
        if payload == DONE_SENTINEL:
            return DoneEvent()
        return ContentEvent(payload)

    if line.startswith(ERROR_PREFIX):
        return ErrorEvent(line[len(ERROR_PREFIX) :])

    return None


__all__ = [
    "DATA_PREFIX",
    "DONE_SENTINEL",
    "ERROR_PREFIX",
    "SSELineDecoder",
    "classify_line",
]
