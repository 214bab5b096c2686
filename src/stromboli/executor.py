# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request executor: timeout, cancellation, interceptors, classification, retry.

Every non-streaming API call goes through RequestExecutor.execute(). One
call is a loop of attempts. Each attempt:

1. builds fresh headers (correlation id, bearer token, static headers)
2. runs the ``on_request`` hook, which may edit the headers
3. sends the request through the transport
4. runs the ``on_response`` hook with a narrowed response view
5. turns an error body or a missing body into an HTTPError

Steps 2 and 3 share one deadline: together they race the per-attempt
timeout and the caller's CancelToken.

Failures are classified into StromboliError, passed to ``on_error``, and
retried according to the RetryPolicy. The last classified error is raised
unchanged once the policy says stop.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections.abc import Callable
from typing import Any, TypeVar

from .cancellation import (
    CancelToken,
    OperationCancelled,
    OperationTimedOut,
    race,
    sleep,
)
from .config import ClientConfig
from .exceptions import StromboliError
from .observability.collector import MetricsCollector
from .observability.constants import (
    REQUEST_DURATION_SECONDS,
    REQUEST_RETRIES_TOTAL,
    REQUESTS_TOTAL,
)
from .protocols.transport import TransportProtocol, TransportResponse
from .retry import RetryPolicy
from .types.operation import (
    InterceptorResponse,
    Operation,
    RequestContext,
    generate_request_id,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

TokenProvider = Callable[[], str | None]


async def invoke_hook(hook: Callable[[T], Any] | None, value: T) -> None:
    """Call a sync or async hook; exceptions propagate to the caller."""
    if hook is None:
        return
    result = hook(value)
    if inspect.isawaitable(result):
        await result


class RequestExecutor:
    """
    Runs Operations against a transport with retries.

    Args:
        transport: Transport performing the HTTP exchange
        config: Client configuration (timeout, retries, hooks, headers)
        token_provider: Returns the current bearer token; read once per attempt
        metrics: Optional collector for request metrics
        retry_policy: Overrides the policy derived from ``config``

    Example:
        >>> executor = RequestExecutor(transport, ClientConfig("http://localhost:8585"))
        >>> data = await executor.execute(Operation("GET", "/health", name="health"))
    """

    def __init__(
        self,
        transport: TransportProtocol,
        config: ClientConfig,
        token_provider: TokenProvider | None = None,
        metrics: MetricsCollector | None = None,
        retry_policy: RetryPolicy | None = None,
    ):
        self._transport = transport
        self._config = config
        self._token_provider = token_provider
        self._metrics = metrics
        self._retry_policy = retry_policy or RetryPolicy.from_config(config)

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._retry_policy

    async def execute(
        self, operation: Operation, *, cancel: CancelToken | None = None
    ) -> Any:
        """
        Execute ``operation`` and return its parsed response body.

        Args:
            operation: The call to perform
            cancel: Optional token that aborts the call, including retry waits

        Returns:
            The response payload (None for ``expect_body=False`` operations
            that returned no body)

        Raises:
            StromboliError: The classified failure of the last attempt
            asyncio.CancelledError: The calling task was cancelled
        """
        started = time.perf_counter()
        attempt = 1

        while True:
            try:
                result = await self._attempt(operation, attempt, cancel)
            except StromboliError as error:
                await self._notify_error(error)
                decision = self._retry_policy.decide(error, attempt)
                if not decision.should_retry:
                    logger.error(
                        f"{operation.label} failed after {attempt} attempt(s): "
                        f"[{error.code}] {error.message}"
                    )
                    self._record(operation, str(error.code), started)
                    raise

                logger.warning(
                    f"{operation.label} attempt {attempt} failed "
                    f"([{error.code}] {error.message}); "
                    f"retrying in {decision.delay_ms:.0f}ms"
                )
                if self._metrics is not None:
                    self._metrics.inc_counter(
                        REQUEST_RETRIES_TOTAL, labels={"operation": operation.label}
                    )
                try:
                    await sleep(decision.delay_ms, cancel)
                except OperationCancelled:
                    aborted = StromboliError.aborted_error()
                    await self._notify_error(aborted)
                    self._record(operation, str(aborted.code), started)
                    raise aborted from None
                attempt += 1
                continue

            self._record(operation, "success", started)
            return result

    async def _attempt(
        self, operation: Operation, attempt: int, cancel: CancelToken | None
    ) -> Any:
        if cancel is not None and cancel.cancelled:
            raise StromboliError.aborted_error()

        request_id = generate_request_id()
        context = RequestContext(
            method=operation.method,
            path=operation.path,
            headers=self._build_headers(request_id),
            attempt=attempt,
            request_id=request_id,
        )
        hook_done = False

        async def send() -> TransportResponse:
            # The on_request hook runs inside the attempt deadline.
            nonlocal hook_done
            await invoke_hook(self._config.on_request, context)
            hook_done = True
            logger.debug(f"{operation.label} attempt {attempt} started [{request_id}]")
            return await self._transport.perform(operation, context.headers)

        timeout_ms = self._config.timeout_ms
        try:
            response = await race(send(), timeout_ms=timeout_ms, cancel=cancel)
        except asyncio.CancelledError:
            raise
        except StromboliError:
            raise
        except OperationCancelled:
            raise StromboliError.aborted_error() from None
        except OperationTimedOut:
            raise StromboliError.timeout_error(timeout_ms) from None
        except Exception as e:
            if not hook_done:
                raise
            raise StromboliError.network_error(e) from e

        view = InterceptorResponse(
            status=response.status, ok=response.ok, url=response.url
        )
        await invoke_hook(self._config.on_response, view)

        if (
            response.error is not None
            or not response.ok
            or (operation.expect_body and response.data is None)
        ):
            raise StromboliError.from_response(response.status, response.error)

        logger.debug(
            f"{operation.label} completed with status {response.status} [{request_id}]"
        )
        return response.data

    def _build_headers(self, request_id: str) -> dict[str, str]:
        headers = dict(self._config.headers)
        headers["X-Request-ID"] = request_id
        token = self._token_provider() if self._token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _notify_error(self, error: StromboliError) -> None:
        try:
            await invoke_hook(self._config.on_error, error)
        except Exception as hook_error:
            logger.warning(
                f"on_error hook raised {type(hook_error).__name__}: {hook_error}"
            )

    def _record(self, operation: Operation, outcome: str, started: float) -> None:
        if self._metrics is None:
            return
        labels = {"operation": operation.label}
        self._metrics.inc_counter(REQUESTS_TOTAL, labels={**labels, "outcome": outcome})
        self._metrics.observe_histogram(
            REQUEST_DURATION_SECONDS, time.perf_counter() - started, labels=labels
        )


__all__ = ["RequestExecutor", "TokenProvider", "invoke_hook"]
