# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Server-sent event streaming for ``GET /run/stream``.

This module provides:
- EventStream: Async iterator over the events of one stream
- StreamContext / StreamState: Per-stream bookkeeping and lifecycle
- SSELineDecoder / classify_line: Incremental line decoding and classification
- Event dataclasses: ContentEvent, ToolUseEvent, ToolResultEvent, ErrorEvent, DoneEvent
"""

from .context import StreamContext, StreamState
from .decoder import SSELineDecoder, classify_line
from .events import (
    ContentEvent,
    DoneEvent,
    ErrorEvent,
    StreamEvent,
    ToolResultEvent,
    ToolUseEvent,
)
from .reader import EventStream

__all__ = [
    "ContentEvent",
    "DoneEvent",
    "ErrorEvent",
    "EventStream",
    "SSELineDecoder",
    "StreamContext",
    "StreamEvent",
    "StreamState",
    "ToolResultEvent",
    "ToolUseEvent",
    "classify_line",
]
