# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Stream event types.

A StreamEvent is one of five frozen dataclasses, discriminated by the
``type`` field. The line decoder produces content, error and done events;
ToolUseEvent and ToolResultEvent complete the union for callers that build
events from other sources.

Usage:
    async for event in stream:
        if event.type == "content":
            print(event.content, end="")
        elif event.type == "error":
            log.warning(event.message)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Union


@dataclass(frozen=True)
class ContentEvent:
    """A chunk of assistant output (the payload of a ``data:`` line)."""

    content: str
    type: Literal["content"] = field(default="content", init=False)


@dataclass(frozen=True)
class ToolUseEvent:
    """The agent invoked a tool."""

    id: str
    name: str
    input: dict[str, Any] = field(default_factory=dict)
    type: Literal["tool_use"] = field(default="tool_use", init=False)


@dataclass(frozen=True)
class ToolResultEvent:
    """A tool invocation finished."""

    id: str
    result: Any = None
    is_error: bool = False
    type: Literal["tool_result"] = field(default="tool_result", init=False)


@dataclass(frozen=True)
class ErrorEvent:
    """
    The server reported an error inside the stream.

    Error events do not end the stream; the server decides whether more data
    follows.
    """

    message: str
    type: Literal["error"] = field(default="error", init=False)


@dataclass(frozen=True)
class DoneEvent:
    """End of stream, either ``data: [DONE]`` or the body ending."""

    type: Literal["done"] = field(default="done", init=False)


StreamEvent = Union[ContentEvent, ToolUseEvent, ToolResultEvent, ErrorEvent, DoneEvent]


__all__ = [
    "ContentEvent",
    "DoneEvent",
    "ErrorEvent",
    "StreamEvent",
    "ToolResultEvent",
    "ToolUseEvent",
]
