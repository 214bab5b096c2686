# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocols for the HTTP transport consumed by the executor and stream reader."""

from __future__ import annotations

from collections.abc import AsyncIterator, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from ..types.operation import Operation


@dataclass(frozen=True)
class TransportResponse:
    """
    Result of one transport call, in the schema-derived client's shape.

    Attributes:
        status: HTTP status code
        data: Parsed body for 2xx responses, otherwise None
        error: Parsed body (or raw text) for non-2xx responses, otherwise None
        url: Final request URL
    """

    status: int
    data: Any = None
    error: Any = None
    url: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@runtime_checkable
class StreamingResponseProtocol(Protocol):
    """
    Open streaming HTTP response.

    ``httpx.Response`` obtained with ``send(..., stream=True)`` satisfies this
    protocol as-is.
    """

    @property
    def status_code(self) -> int: ...

    def aiter_bytes(self) -> AsyncIterator[bytes]:
        """Iterate over body chunks as they arrive."""
        ...

    async def aread(self) -> bytes:
        """Read the remaining body (used for error responses)."""
        ...

    async def aclose(self) -> None:
        """Release the underlying connection."""
        ...


@runtime_checkable
class TransportProtocol(Protocol):
    """
    Minimal transport interface.

    The executor and stream reader own timeouts, cancellation, retries and
    error classification; a transport only moves bytes. Transports must not
    raise for non-2xx statuses. Any exception they raise is treated as a
    network failure.
    """

    async def perform(
        self, operation: Operation, headers: Mapping[str, str]
    ) -> TransportResponse:
        """Send one request and return its status and parsed body."""
        ...

    async def open_stream(
        self,
        path: str,
        query: Mapping[str, Any],
        headers: Mapping[str, str],
    ) -> StreamingResponseProtocol:
        """Send a GET and return once response headers have arrived."""
        ...

    async def aclose(self) -> None:
        """Release transport resources."""
        ...
