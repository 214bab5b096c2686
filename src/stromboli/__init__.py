# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Stromboli - Async Python client for the Stromboli API.

Stromboli runs Claude Code inside isolated Podman containers. This library
wraps its HTTP API with the behavior a production client needs.

Key Features:
    - Per-request timeouts composed with caller-owned cancellation
    - Bounded retries with exponential, linear, fixed or custom backoff
    - Request, response and error interceptors
    - Server-sent event streaming with connection and idle timeouts
    - Job polling with status change callbacks
    - Bearer token lifecycle (authenticate, refresh, validate, logout)
    - Prometheus metrics and standard library logging

Quick Start:
    >>> from stromboli import StromboliClient, SimpleRunRequest
    >>>
    >>> async with StromboliClient("http://localhost:8585", retries=3) as client:
    ...     result = await client.run(SimpleRunRequest(prompt="Hello", model="haiku"))
    ...     print(result.output)

Main Exports:
    - StromboliClient, ClientConfig: Client and configuration
    - StromboliError, ErrorCode: Error taxonomy
    - CancelToken: Cancellation signal accepted by every call
    - EventStream and the stream event dataclasses
    - Request and response dataclasses

Version: 0.1.0
"""

__version__ = "0.1.0"

from .cancellation import CancelToken
from .client import StromboliClient
from .config import ClientConfig, RetryBackoff
from .exceptions import (
    AbortedError,
    ConfigurationError,
    ErrorCode,
    HTTPError,
    NetworkError,
    RequestTimeoutError,
    StreamError,
    StromboliError,
)
from .executor import RequestExecutor
from .polling import JobPoller
from .protocols import TransportProtocol, TransportResponse
from .retry import RetryDecision, RetryPolicy
from .streaming import (
    ContentEvent,
    DoneEvent,
    ErrorEvent,
    EventStream,
    StreamEvent,
    StreamState,
    ToolResultEvent,
    ToolUseEvent,
)
from .transport import HttpxTransport
from .types import (
    AsyncRunResponse,
    ClaudeOptions,
    ClaudeStatusResponse,
    CrashInfo,
    HealthResponse,
    InterceptorResponse,
    JobListResponse,
    JobResponse,
    JobStatus,
    LogoutResponse,
    PodmanOptions,
    RequestContext,
    RunRequest,
    RunResponse,
    SecretsListResponse,
    SessionDestroyResponse,
    SessionListResponse,
    SessionMessagesResponse,
    SimpleRunRequest,
    TokenResponse,
    ValidateResponse,
)
from .versioning import API_VERSION_RANGE, SDK_VERSION, is_compatible

__all__ = [
    # Versioning
    "API_VERSION_RANGE",
    "SDK_VERSION",
    # Exceptions
    "AbortedError",
    # Types
    "AsyncRunResponse",
    # Cancellation
    "CancelToken",
    "ClaudeOptions",
    "ClaudeStatusResponse",
    # Configuration
    "ClientConfig",
    "ConfigurationError",
    # Streaming
    "ContentEvent",
    "CrashInfo",
    "DoneEvent",
    "ErrorCode",
    "ErrorEvent",
    "EventStream",
    "HTTPError",
    "HealthResponse",
    # Transport
    "HttpxTransport",
    "InterceptorResponse",
    "JobListResponse",
    # Polling
    "JobPoller",
    "JobResponse",
    "JobStatus",
    "LogoutResponse",
    "NetworkError",
    "PodmanOptions",
    "RequestContext",
    # Execution
    "RequestExecutor",
    "RequestTimeoutError",
    "RetryBackoff",
    "RetryDecision",
    "RetryPolicy",
    "RunRequest",
    "RunResponse",
    "SecretsListResponse",
    "SessionDestroyResponse",
    "SessionListResponse",
    "SessionMessagesResponse",
    "SimpleRunRequest",
    "StreamError",
    "StreamEvent",
    "StreamState",
    # Client
    "StromboliClient",
    "StromboliError",
    "TokenResponse",
    "ToolResultEvent",
    "ToolUseEvent",
    "TransportProtocol",
    "TransportResponse",
    "ValidateResponse",
    "is_compatible",
]
