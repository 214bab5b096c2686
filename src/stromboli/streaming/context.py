# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Per-stream bookkeeping.

StreamState tracks where an EventStream is in its lifecycle and
StreamContext records what it has seen so far.
"""

from __future__ import annotations

import time
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum

from ..exceptions import StromboliError


class StreamState(Enum):
    """Lifecycle of an EventStream.

    CONNECTING -> STREAMING -> one of COMPLETED, ABORTED, FAILED.
    A stream that fails while connecting goes straight to FAILED or ABORTED.
    """

    CONNECTING = "connecting"
    STREAMING = "streaming"
    COMPLETED = "completed"
    ABORTED = "aborted"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (StreamState.COMPLETED, StreamState.ABORTED, StreamState.FAILED)


@dataclass
class StreamContext:
    """
    Runtime record of one stream.

    Attributes:
        request_id: Correlation id sent in ``X-Request-ID``
        prompt: The prompt the stream was opened for
        created_at: Timestamp when the stream object was created

    Runtime tracking attributes:
        connected_at: Timestamp when response headers arrived
        finished_at: Timestamp when the stream reached a terminal state
        chunk_count: Number of body chunks received
        byte_count: Number of body bytes received
        event_counts: Events delivered, by event type
        error: The error that ended the stream, if any
    """

    request_id: str
    prompt: str = field(default="", repr=False)
    created_at: float = field(default_factory=time.time)

    connected_at: float | None = field(default=None, repr=False)
    finished_at: float | None = field(default=None, repr=False)
    last_chunk_at: float | None = field(default=None, repr=False)
    chunk_count: int = field(default=0, repr=False)
    byte_count: int = field(default=0, repr=False)
    event_counts: Counter[str] = field(default_factory=Counter, repr=False)
    error: StromboliError | None = field(default=None, repr=False)

    def record_connected(self) -> None:
        self.connected_at = time.time()

    def record_chunk(self, size: int) -> None:
        """Record receipt of one body chunk of ``size`` bytes."""
        self.last_chunk_at = time.time()
        self.chunk_count += 1
        self.byte_count += size

    def record_event(self, event_type: str) -> None:
        self.event_counts[event_type] += 1

    def record_finished(self, error: StromboliError | None = None) -> None:
        if self.finished_at is None:
            self.finished_at = time.time()
            self.error = error

    @property
    def event_count(self) -> int:
        return sum(self.event_counts.values())

    @property
    def duration_seconds(self) -> float:
        """Time from creation until finish (or until now while still open)."""
        end = self.finished_at if self.finished_at is not None else time.time()
        return end - self.created_at


__all__ = ["StreamContext", "StreamState"]
