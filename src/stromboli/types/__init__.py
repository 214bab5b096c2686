# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Type definitions for requests, responses and the request lifecycle."""

from .auth import LogoutResponse, TokenResponse, ValidateResponse
from .jobs import (
    TERMINAL_STATUSES,
    CrashInfo,
    JobListResponse,
    JobResponse,
    JobStatus,
    parse_status,
)
from .operation import (
    InterceptorResponse,
    Operation,
    RequestContext,
    generate_request_id,
)
from .run import (
    AsyncRunResponse,
    ClaudeOptions,
    Model,
    PodmanOptions,
    RunRequest,
    RunResponse,
    SimpleRunRequest,
)
from .sessions import (
    SessionDestroyResponse,
    SessionListResponse,
    SessionMessagesResponse,
)
from .system import (
    ClaudeStatusResponse,
    ComponentHealth,
    HealthResponse,
    SecretsListResponse,
)

__all__ = [
    "TERMINAL_STATUSES",
    # Run
    "AsyncRunResponse",
    "ClaudeOptions",
    # System
    "ClaudeStatusResponse",
    "ComponentHealth",
    # Jobs
    "CrashInfo",
    "HealthResponse",
    # Request lifecycle
    "InterceptorResponse",
    "JobListResponse",
    "JobResponse",
    "JobStatus",
    # Auth
    "LogoutResponse",
    "Model",
    "Operation",
    "PodmanOptions",
    "RequestContext",
    "RunRequest",
    "RunResponse",
    "SecretsListResponse",
    # Sessions
    "SessionDestroyResponse",
    "SessionListResponse",
    "SessionMessagesResponse",
    "SimpleRunRequest",
    "TokenResponse",
    "ValidateResponse",
    "generate_request_id",
    "parse_status",
]
