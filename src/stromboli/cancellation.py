# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Cancellation and deadline composition.

A CancelToken is a caller-owned signal that can abort an in-flight request.
``race()`` runs one awaitable against a deadline and an optional token and
reports which of the three finished first. Whatever loses is cancelled and
awaited before ``race()`` returns, so no task or timer outlives the call on
any exit path (result, exception, deadline, cancel token, or cancellation
of the calling task itself).

OperationTimedOut and OperationCancelled are internal signals; the executor
and the stream reader translate them into StromboliError subclasses.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class OperationTimedOut(Exception):
    """The deadline passed before the awaitable finished."""

    def __init__(self, timeout_ms: float | None):
        super().__init__(f"deadline of {timeout_ms}ms exceeded")
        self.timeout_ms = timeout_ms


class OperationCancelled(Exception):
    """The CancelToken fired before the awaitable finished."""

    def __init__(self, reason: str | None = None):
        super().__init__(reason or "cancelled")
        self.reason = reason


class CancelToken:
    """
    Caller-owned cancellation signal.

    One token may be shared by several calls; cancelling it aborts all of
    them. Tokens cannot be reset.

    Example:
        >>> token = CancelToken()
        >>> task = asyncio.create_task(client.run(request, cancel=token))
        >>> token.cancel("user pressed Ctrl-C")
        >>> await task  # raises AbortedError
    """

    __slots__ = ("_event", "_reason")

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: str | None = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        return self._reason

    def cancel(self, reason: str | None = None) -> None:
        """Fire the token. Later calls are no-ops."""
        if self._event.is_set():
            return
        self._reason = reason
        self._event.set()

    async def wait(self) -> None:
        """Block until the token is cancelled."""
        await self._event.wait()

    def __repr__(self) -> str:
        return f"CancelToken(cancelled={self.cancelled})"


async def race(
    awaitable: Awaitable[T],
    *,
    timeout_ms: float | None = None,
    cancel: CancelToken | None = None,
) -> T:
    """
    Await ``awaitable`` unless the deadline or the cancel token fires first.

    Args:
        awaitable: The operation to run
        timeout_ms: Deadline in milliseconds, or None for no deadline
        cancel: Optional token that aborts the operation

    Returns:
        The awaitable's result

    Raises:
        OperationCancelled: The token was already cancelled or fired first
        OperationTimedOut: The deadline passed first
        Exception: Whatever the awaitable raised
    """
    if cancel is not None and cancel.cancelled:
        if inspect.iscoroutine(awaitable):
            awaitable.close()
        raise OperationCancelled(cancel.reason)

    task = asyncio.ensure_future(awaitable)
    waiters: set[asyncio.Future] = {task}
    cancel_waiter: asyncio.Future | None = None
    if cancel is not None:
        cancel_waiter = asyncio.ensure_future(cancel.wait())
        waiters.add(cancel_waiter)

    timeout = timeout_ms / 1000 if timeout_ms is not None else None
    try:
        done, _ = await asyncio.wait(
            waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED
        )
    finally:
        if cancel_waiter is not None and not cancel_waiter.done():
            await _cancel_and_wait(cancel_waiter)
        if not task.done():
            await _cancel_and_wait(task)

    # A task that finished successfully during cleanup still wins.
    if task in done or (
        task.done() and not task.cancelled() and task.exception() is None
    ):
        return task.result()
    if cancel is not None and cancel_waiter in done:
        raise OperationCancelled(cancel.reason)
    raise OperationTimedOut(timeout_ms)


async def sleep(delay_ms: float, cancel: CancelToken | None = None) -> None:
    """Sleep for ``delay_ms``; raises OperationCancelled if the token fires."""
    if delay_ms <= 0 and cancel is None:
        return
    await race(asyncio.sleep(max(delay_ms, 0) / 1000), cancel=cancel)


async def _cancel_and_wait(future: asyncio.Future) -> None:
    future.cancel()
    try:
        await future
    except asyncio.CancelledError:
        pass
    except Exception as e:
        # The result is being discarded; the primary outcome is reported elsewhere.
        logger.debug(f"Discarded task finished with {type(e).__name__}: {e}")


__all__ = [
    "CancelToken",
    "OperationCancelled",
    "OperationTimedOut",
    "race",
    "sleep",
]
