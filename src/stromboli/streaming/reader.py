# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
EventStream: async iterator over the events of one SSE response.

The stream is lazy. Nothing is sent until the first ``__anext__()``. Two
deadlines apply, never both at once:

- the connection timeout covers sending the request and receiving the
  response headers
- the idle timeout covers each chunk read once the response is open, and
  restarts with every chunk

Every deadline is scoped to a single await, so no timer survives past the
read it guards. The response is closed on every exit path: Done, error,
cancellation, or an explicit ``aclose()``.

Usage:
    async with client.stream("Summarize README.md") as stream:
        async for event in stream:
            if event.type == "content":
                print(event.content, end="")
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections import deque
from collections.abc import AsyncIterator, Mapping
from typing import Any

from ..cancellation import CancelToken, OperationCancelled, OperationTimedOut, race
from ..exceptions import ErrorCode, StromboliError
from ..observability.collector import MetricsCollector
from ..observability.constants import (
    ACTIVE_STREAMS,
    STREAM_DURATION_SECONDS,
    STREAM_EVENTS_TOTAL,
    STREAM_FAILURES_TOTAL,
)
from ..protocols.transport import StreamingResponseProtocol, TransportProtocol
from .context import StreamContext, StreamState
from .decoder import SSELineDecoder, classify_line
from .events import DoneEvent, StreamEvent

logger = logging.getLogger(__name__)


class EventStream(AsyncIterator[StreamEvent]):
    """
    Async iterator of StreamEvents for one ``GET /run/stream`` request.

    Iteration ends after a DoneEvent, which is always the last event of a
    successful stream. Failures raise StromboliError with code
    CONNECTION_TIMEOUT, IDLE_TIMEOUT, STREAM_ERROR, ABORTED or HTTP_ERROR.
    A stream cannot be restarted; call ``client.stream()`` again instead.

    Args:
        transport: Transport used to open the response
        path: Request path
        query: Query parameters (None values are dropped by the transport)
        headers: Request headers, including the correlation id
        context: Bookkeeping record for this stream
        connection_timeout_ms: Deadline for receiving response headers
        idle_timeout_ms: Maximum gap between chunks
        cancel: Optional caller-owned CancelToken
        metrics: Optional collector for stream metrics
    """

    def __init__(
        self,
        transport: TransportProtocol,
        path: str,
        query: Mapping[str, Any],
        headers: Mapping[str, str],
        context: StreamContext,
        connection_timeout_ms: float,
        idle_timeout_ms: float,
        cancel: CancelToken | None = None,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self._transport = transport
        self._path = path
        self._query = dict(query)
        self._headers = dict(headers)
        self._ctx = context
        self._connection_timeout_ms = connection_timeout_ms
        self._idle_timeout_ms = idle_timeout_ms
        self._cancel = cancel
        self._metrics = metrics

        self._state = StreamState.CONNECTING
        self._response: StreamingResponseProtocol | None = None
        self._chunks: AsyncIterator[bytes] | None = None
        self._decoder = SSELineDecoder()
        self._lines: deque[str] = deque()
        self._body_ended = False

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def context(self) -> StreamContext:
        return self._ctx

    @property
    def request_id(self) -> str:
        return self._ctx.request_id

    def __aiter__(self) -> EventStream:
        return self

    async def __anext__(self) -> StreamEvent:
        if self._state.is_terminal:
            raise StopAsyncIteration

        try:
            event = await self._next_event()
        except asyncio.CancelledError:
            await self._finish(StreamState.ABORTED)
            raise
        except StromboliError as error:
            state = (
                StreamState.ABORTED
                if error.code == ErrorCode.ABORTED
                else StreamState.FAILED
            )
            await self._finish(state, error)
            raise

        self._ctx.record_event(event.type)
        if self._metrics is not None:
            self._metrics.inc_counter(
                STREAM_EVENTS_TOTAL, labels={"event_type": event.type}
            )
        if isinstance(event, DoneEvent):
            await self._finish(StreamState.COMPLETED)
        return event

    async def aclose(self) -> None:
        """Stop the stream and release the connection. Safe to call twice."""
        if not self._state.is_terminal:
            await self._finish(StreamState.ABORTED)

    async def collect(self) -> list[StreamEvent]:
        """Consume the stream and return every event, Done included."""
        return [event async for event in self]

    async def __aenter__(self) -> EventStream:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # === Internals ===

    async def _next_event(self) -> StreamEvent:
        if self._state is StreamState.CONNECTING:
            await self._connect()

        while True:
            while self._lines:
                event = classify_line(self._lines.popleft())
                if event is not None:
                    return event

            if self._body_ended:
                return DoneEvent()

            chunk = await self._read_chunk()
            if chunk is None:
                self._body_ended = True
                self._lines.extend(self._decoder.flush())
                continue

            self._ctx.record_chunk(len(chunk))
            self._lines.extend(self._decoder.feed(chunk))

    async def _connect(self) -> None:
        timeout_ms = self._connection_timeout_ms
        logger.debug(f"Opening stream {self._path} [{self.request_id}]")
        try:
            response = await race(
                self._transport.open_stream(self._path, self._query, self._headers),
                timeout_ms=timeout_ms,
                cancel=self._cancel,
            )
        except asyncio.CancelledError:
            raise
        except StromboliError:
            raise
        except OperationCancelled:
            raise StromboliError.aborted_error() from None
        except OperationTimedOut:
            raise StromboliError.connection_timeout(timeout_ms) from None
        except Exception as e:
            raise StromboliError.stream_error(e) from e

        self._response = response
        self._ctx.record_connected()
        if self._metrics is not None:
            self._metrics.inc_gauge(ACTIVE_STREAMS)

        status = response.status_code
        if not 200 <= status < 300:
            raise StromboliError.from_response(status, await self._read_error_body())

        self._chunks = response.aiter_bytes()
        self._state = StreamState.STREAMING
        logger.debug(f"Stream connected with status {status} [{self.request_id}]")

    async def _read_error_body(self) -> Any:
        assert self._response is not None
        try:
            raw = await race(
                self._response.aread(),
                timeout_ms=self._idle_timeout_ms,
                cancel=self._cancel,
            )
        except asyncio.CancelledError:
            raise
        except OperationCancelled:
            raise StromboliError.aborted_error() from None
        except OperationTimedOut:
            raise StromboliError.idle_timeout(self._idle_timeout_ms) from None
        except Exception as e:
            raise StromboliError.stream_error(e) from e

        text = raw.decode("utf-8", errors="replace")
        try:
            return json.loads(text)
        except ValueError:
            return text

    async def _read_chunk(self) -> bytes | None:
        """Next body chunk, or None once the body has ended."""
        timeout_ms = self._idle_timeout_ms
        try:
            return await race(
                self._next_chunk(), timeout_ms=timeout_ms, cancel=self._cancel
            )
        except asyncio.CancelledError:
            raise
        except OperationCancelled:
            raise StromboliError.aborted_error() from None
        except OperationTimedOut:
            raise StromboliError.idle_timeout(timeout_ms) from None
        except Exception as e:
            raise StromboliError.stream_error(e) from e

    async def _next_chunk(self) -> bytes | None:
        assert self._chunks is not None
        try:
            return await self._chunks.__anext__()
        except StopAsyncIteration:
            return None

    async def _finish(
        self, state: StreamState, error: StromboliError | None = None
    ) -> None:
        if self._state.is_terminal:
            return
        self._state = state
        self._ctx.record_finished(error)

        if error is not None:
            logger.warning(
                f"Stream {state.value} after {self._ctx.event_count} event(s): "
                f"[{error.code}] {error.message} [{self.request_id}]"
            )
        else:
            logger.debug(
                f"Stream {state.value} after {self._ctx.event_count} event(s) "
                f"in {self._ctx.duration_seconds:.2f}s [{self.request_id}]"
            )

        if self._metrics is not None:
            if error is not None:
                self._metrics.inc_counter(
                    STREAM_FAILURES_TOTAL, labels={"code": str(error.code)}
                )
            self._metrics.observe_histogram(
                STREAM_DURATION_SECONDS, self._ctx.duration_seconds
            )
            if self._response is not None:
                self._metrics.dec_gauge(ACTIVE_STREAMS)

        await self._release()

    async def _release(self) -> None:
        chunks, self._chunks = self._chunks, None
        response, self._response = self._response, None
        aclose_chunks = getattr(chunks, "aclose", None)
        if aclose_chunks is not None:
            try:
                await aclose_chunks()
            except Exception as e:
                logger.debug(f"Error closing stream body iterator: {e}")
        if response is not None:
            try:
                await response.aclose()
            except Exception as e:
                logger.debug(f"Error closing stream response: {e}")


__all__ = ["EventStream"]
