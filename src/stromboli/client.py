# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
StromboliClient: the public entry point.

The client owns the configuration, the bearer token and the transport, and
wires them into the request executor, the stream reader and the job poller.
Each API method builds an Operation, runs it through the executor and
converts the JSON payload into a response dataclass.

Example:
    async with StromboliClient("http://localhost:8585", retries=2) as client:
        await client.authenticate("my-client")
        job = await client.run_async(SimpleRunRequest(prompt="Fix the tests"))
        result = await client.wait_for_job(job.job_id)
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any

import httpx

from .cancellation import CancelToken
from .config import ClientConfig
from .exceptions import ConfigurationError
from .executor import RequestExecutor
from .observability.collector import MetricsCollector, get_metrics_collector
from .polling import (
    DEFAULT_MAX_WAIT_MS,
    DEFAULT_POLL_INTERVAL_MS,
    JobPoller,
    StatusChangeCallback,
)
from .protocols.transport import TransportProtocol
from .streaming.context import StreamContext
from .streaming.reader import EventStream
from .transport import HttpxTransport
from .types.auth import LogoutResponse, TokenResponse, ValidateResponse
from .types.jobs import JobListResponse, JobResponse
from .types.operation import Operation, generate_request_id
from .types.run import AsyncRunResponse, RunRequest, RunResponse, SimpleRunRequest
from .types.sessions import (
    SessionDestroyResponse,
    SessionListResponse,
    SessionMessagesResponse,
)
from .types.system import ClaudeStatusResponse, HealthResponse, SecretsListResponse

logger = logging.getLogger(__name__)

STREAM_PATH = "/run/stream"


class StromboliClient:
    """
    Async client for the Stromboli API.

    Args:
        config: Base URL or a full ClientConfig
        transport: Custom transport (the client does not close it)
        http_client: Pre-configured ``httpx.AsyncClient`` for the default
            transport (the client does not close it)
        metrics: Metrics collector; defaults to the global collector when
            ``config.metrics_enabled`` is set
        **overrides: ClientConfig fields applied on top of ``config``

    Every method accepts ``cancel``, a CancelToken that aborts the call.
    """

    def __init__(
        self,
        config: ClientConfig | str,
        *,
        transport: TransportProtocol | None = None,
        http_client: httpx.AsyncClient | None = None,
        metrics: MetricsCollector | None = None,
        **overrides: Any,
    ):
        if isinstance(config, str):
            config = ClientConfig(base_url=config, **overrides)
        elif overrides:
            config = dataclasses.replace(config, **overrides)
        self._config = config
        self._token: str | None = None

        self._owns_transport = transport is None
        self._transport: TransportProtocol = transport or HttpxTransport(
            config.base_url, http_client=http_client
        )

        if config.metrics_enabled:
            self._metrics: MetricsCollector | None = metrics or get_metrics_collector()
        else:
            self._metrics = None

        self._executor = RequestExecutor(
            self._transport,
            config,
            token_provider=self.get_auth_token,
            metrics=self._metrics,
        )
        self._poller = JobPoller(self._fetch_job, metrics=self._metrics)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def executor(self) -> RequestExecutor:
        return self._executor

    # === Lifecycle ===

    async def aclose(self) -> None:
        """Close the default transport. Injected transports are left open."""
        if self._owns_transport:
            await self._transport.aclose()

    async def __aenter__(self) -> StromboliClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # === System ===

    async def health(self, *, cancel: CancelToken | None = None) -> HealthResponse:
        """Check API health (``GET /health``)."""
        data = await self._call(Operation("GET", "/health", name="health"), cancel)
        return HealthResponse.from_dict(data)

    async def claude_status(
        self, *, cancel: CancelToken | None = None
    ) -> ClaudeStatusResponse:
        """Whether Claude credentials are configured on the server."""
        data = await self._call(
            Operation("GET", "/claude/status", name="claude_status"), cancel
        )
        return ClaudeStatusResponse.from_dict(data)

    async def list_secrets(
        self, *, cancel: CancelToken | None = None
    ) -> SecretsListResponse:
        """Names of the secrets available to containers."""
        data = await self._call(
            Operation("GET", "/secrets", name="list_secrets"), cancel
        )
        return SecretsListResponse.from_dict(data)

    # === Execution ===

    async def run(
        self,
        request: RunRequest | SimpleRunRequest,
        *,
        cancel: CancelToken | None = None,
    ) -> RunResponse:
        """
        Run a prompt and wait for the result (``POST /run``).

        Example:
            >>> request = SimpleRunRequest(prompt="Hello", model="haiku")
            >>> result = await client.run(request)
            >>> result.output
            'Hello! How can I help?'
        """
        operation = Operation("POST", "/run", body=_run_body(request), name="run")
        return RunResponse.from_dict(await self._call(operation, cancel))

    async def run_async(
        self,
        request: RunRequest | SimpleRunRequest,
        *,
        cancel: CancelToken | None = None,
    ) -> AsyncRunResponse:
        """Submit a prompt as a background job (``POST /run/async``)."""
        operation = Operation(
            "POST", "/run/async", body=_run_body(request), name="run_async"
        )
        return AsyncRunResponse.from_dict(await self._call(operation, cancel))

    def stream(
        self,
        prompt: str,
        *,
        workdir: str | None = None,
        session_id: str | None = None,
        connection_timeout_ms: float | None = None,
        idle_timeout_ms: float | None = None,
        cancel: CancelToken | None = None,
    ) -> EventStream:
        """
        Open a server-sent event stream for ``prompt`` (``GET /run/stream``).

        The request is sent on first iteration. The returned stream should be
        used as an async context manager so the connection is released on
        early exit.

        Raises:
            ConfigurationError: An explicit timeout is not positive

        Example:
            >>> async with client.stream("Explain this repo") as events:
            ...     async for event in events:
            ...         if event.type == "content":
            ...             print(event.content)
        """
        request_id = generate_request_id()
        headers = dict(self._config.headers)
        headers["Accept"] = "text/event-stream"
        headers["X-Request-ID"] = request_id
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        return EventStream(
            self._transport,
            STREAM_PATH,
            {"prompt": prompt, "workdir": workdir, "session_id": session_id},
            headers,
            StreamContext(request_id=request_id, prompt=prompt),
            connection_timeout_ms=_stream_timeout(
                "connection_timeout_ms",
                connection_timeout_ms,
                self._config.stream_connection_timeout_ms,
            ),
            idle_timeout_ms=_stream_timeout(
                "idle_timeout_ms", idle_timeout_ms, self._config.stream_idle_timeout_ms
            ),
            cancel=cancel,
            metrics=self._metrics,
        )

    # === Jobs ===

    async def list_jobs(self, *, cancel: CancelToken | None = None) -> JobListResponse:
        data = await self._call(Operation("GET", "/jobs", name="list_jobs"), cancel)
        return JobListResponse.from_dict(data)

    async def get_job(
        self, job_id: str, *, cancel: CancelToken | None = None
    ) -> JobResponse:
        operation = Operation(
            "GET", "/jobs/{id}", path_params={"id": job_id}, name="get_job"
        )
        return JobResponse.from_dict(await self._call(operation, cancel))

    async def cancel_job(
        self, job_id: str, *, cancel: CancelToken | None = None
    ) -> None:
        """Cancel a pending or running job (``DELETE /jobs/{id}``)."""
        operation = Operation(
            "DELETE",
            "/jobs/{id}",
            path_params={"id": job_id},
            expect_body=False,
            name="cancel_job",
        )
        await self._call(operation, cancel)

    async def wait_for_job(
        self,
        job_id: str,
        *,
        poll_interval_ms: float = DEFAULT_POLL_INTERVAL_MS,
        max_wait_ms: float = DEFAULT_MAX_WAIT_MS,
        on_status_change: StatusChangeCallback | None = None,
        cancel: CancelToken | None = None,
    ) -> JobResponse:
        """
        Poll a job until it completes, fails, crashes or is cancelled.

        Raises:
            RequestTimeoutError: The job was still running after ``max_wait_ms``
        """
        return await self._poller.wait_for(
            job_id,
            poll_interval_ms=poll_interval_ms,
            max_wait_ms=max_wait_ms,
            on_status_change=on_status_change,
            cancel=cancel,
        )

    # === Sessions ===

    async def list_sessions(
        self, *, cancel: CancelToken | None = None
    ) -> SessionListResponse:
        data = await self._call(
            Operation("GET", "/sessions", name="list_sessions"), cancel
        )
        return SessionListResponse.from_dict(data)

    async def delete_session(
        self, session_id: str, *, cancel: CancelToken | None = None
    ) -> SessionDestroyResponse:
        operation = Operation(
            "DELETE",
            "/sessions/{id}",
            path_params={"id": session_id},
            expect_body=False,
            name="delete_session",
        )
        data = await self._call(operation, cancel)
        return SessionDestroyResponse.from_dict(data or {"session_id": session_id})

    async def get_session_messages(
        self,
        session_id: str,
        *,
        offset: int | None = None,
        limit: int | None = None,
        cancel: CancelToken | None = None,
    ) -> SessionMessagesResponse:
        """One page of a session's conversation history."""
        operation = Operation(
            "GET",
            "/sessions/{id}/messages",
            path_params={"id": session_id},
            query={"offset": offset, "limit": limit},
            name="get_session_messages",
        )
        return SessionMessagesResponse.from_dict(await self._call(operation, cancel))

    # === Authentication ===

    async def authenticate(
        self, client_id: str, *, cancel: CancelToken | None = None
    ) -> TokenResponse:
        """Obtain tokens (``POST /auth/token``) and keep the access token."""
        operation = Operation(
            "POST", "/auth/token", body={"client_id": client_id}, name="authenticate"
        )
        tokens = TokenResponse.from_dict(await self._call(operation, cancel))
        self.set_auth_token(tokens.access_token)
        return tokens

    async def refresh_token(
        self, refresh_token: str, *, cancel: CancelToken | None = None
    ) -> TokenResponse:
        """Exchange a refresh token and keep the new access token."""
        operation = Operation(
            "POST",
            "/auth/refresh",
            body={"refresh_token": refresh_token},
            name="refresh_token",
        )
        tokens = TokenResponse.from_dict(await self._call(operation, cancel))
        self.set_auth_token(tokens.access_token)
        return tokens

    async def validate_token(
        self, *, cancel: CancelToken | None = None
    ) -> ValidateResponse:
        data = await self._call(
            Operation("GET", "/auth/validate", name="validate_token"), cancel
        )
        return ValidateResponse.from_dict(data)

    async def logout(self, *, cancel: CancelToken | None = None) -> LogoutResponse:
        """
        Invalidate the current token (``POST /auth/logout``).

        The stored token is cleared only after the server accepted the call.
        """
        operation = Operation("POST", "/auth/logout", expect_body=False, name="logout")
        data = await self._call(operation, cancel)
        self.set_auth_token(None)
        return LogoutResponse.from_dict(data or {"success": True})

    def set_auth_token(self, token: str | None) -> None:
        self._token = token or None
        logger.debug(f"Auth token {'set' if self._token else 'cleared'}")

    def get_auth_token(self) -> str | None:
        return self._token

    def is_authenticated(self) -> bool:
        return self._token is not None

    # === Internals ===

    async def _call(self, operation: Operation, cancel: CancelToken | None) -> Any:
        return await self._executor.execute(operation, cancel=cancel)

    async def _fetch_job(
        self, job_id: str, cancel: CancelToken | None
    ) -> JobResponse:
        return await self.get_job(job_id, cancel=cancel)


def _run_body(request: RunRequest | SimpleRunRequest) -> dict[str, Any]:
    if isinstance(request, SimpleRunRequest):
        request = request.to_run_request()
    return request.to_dict()


def _stream_timeout(name: str, value: float | None, default: float) -> float:
    if value is None:
        return default
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive")
    return value


__all__ = ["STREAM_PATH", "StromboliClient"]
