# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Exception classes for the Stromboli client library.

Every failure surfaced to callers is a StromboliError. Each instance carries a
stable ``code`` string for programmatic branching, an optional HTTP ``status``
and an optional ``cause`` for diagnostics. Subclasses exist so that each kind
carries exactly the fields that make sense for it (only HTTP errors have a
status), but callers are expected to branch on ``code``:

    try:
        await client.run(SimpleRunRequest(prompt="Hello"))
    except StromboliError as e:
        if e.code == ErrorCode.HTTP_ERROR and e.status == 404:
            ...
        elif e.code == ErrorCode.TIMEOUT_ERROR:
            ...
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes carried by every StromboliError."""

    HTTP_ERROR = "HTTP_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    ABORTED = "ABORTED"
    CONNECTION_TIMEOUT = "CONNECTION_TIMEOUT"
    IDLE_TIMEOUT = "IDLE_TIMEOUT"
    STREAM_ERROR = "STREAM_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    def __str__(self) -> str:
        return self.value


_STREAM_CODES = frozenset(
    {ErrorCode.CONNECTION_TIMEOUT, ErrorCode.IDLE_TIMEOUT, ErrorCode.STREAM_ERROR}
)


class StromboliError(Exception):
    """Base exception for all Stromboli client errors.

    Attributes:
        message: Human-readable description.
        code: One of the ErrorCode values (compares equal to its string).
        status: HTTP status code, only set for HTTP errors.
        cause: Original exception or response body, for debugging.

    The factory classmethods are the intended way to build errors:

        >>> err = StromboliError.from_response(404, {"error": "Job not found"})
        >>> err.code, err.status, err.message
        (<ErrorCode.HTTP_ERROR: 'HTTP_ERROR'>, 404, 'Job not found')
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode | str,
        status: int | None = None,
        cause: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status
        self.cause = cause

    def __repr__(self) -> str:
        parts = [f"code={str(self.code)!r}", f"message={self.message!r}"]
        if self.status is not None:
            parts.append(f"status={self.status}")
        return f"{type(self).__name__}({', '.join(parts)})"

    @property
    def is_retryable(self) -> bool:
        """True for network failures and 5xx HTTP responses."""
        if self.code == ErrorCode.NETWORK_ERROR:
            return True
        return (
            self.code == ErrorCode.HTTP_ERROR
            and self.status is not None
            and self.status >= 500
        )

    # === Factories ===

    @classmethod
    def from_response(cls, status: int, body: Any) -> HTTPError:
        """Build an HTTP error from a status code and a response body.

        If the body is a mapping with an ``error`` field, that field (as a
        string) becomes the message; otherwise the message is ``HTTP {status}``.
        The raw body is kept as the cause.
        """
        if isinstance(body, dict) and "error" in body:
            message = str(body["error"])
        else:
            message = f"HTTP {status}"
        return HTTPError(message, status=status, cause=body)

    @classmethod
    def network_error(cls, cause: Any) -> NetworkError:
        """Request failed before any HTTP response was received."""
        return NetworkError("Network request failed", cause=cause)

    @classmethod
    def timeout_error(cls, timeout_ms: float) -> RequestTimeoutError:
        """Request exceeded the configured timeout."""
        return RequestTimeoutError(
            f"Request timed out after {_format_ms(timeout_ms)}ms",
            timeout_ms=timeout_ms,
        )

    @classmethod
    def job_timeout(cls, job_id: str, timeout_ms: float) -> RequestTimeoutError:
        """A polled job did not reach a terminal status within the wait limit."""
        return RequestTimeoutError(
            f"Job {job_id} did not complete within {_format_ms(timeout_ms)}ms",
            timeout_ms=timeout_ms,
        )

    @classmethod
    def aborted_error(cls) -> AbortedError:
        """Request was cancelled by the caller."""
        return AbortedError("Request was aborted")

    @classmethod
    def connection_timeout(cls, timeout_ms: float) -> StreamError:
        """Streaming connection was not established in time."""
        return StreamError(
            f"Connection timed out after {_format_ms(timeout_ms)}ms",
            code=ErrorCode.CONNECTION_TIMEOUT,
            timeout_ms=timeout_ms,
        )

    @classmethod
    def idle_timeout(cls, timeout_ms: float) -> StreamError:
        """No chunk arrived on an open stream within the idle timeout."""
        return StreamError(
            f"Stream idle for more than {_format_ms(timeout_ms)}ms",
            code=ErrorCode.IDLE_TIMEOUT,
            timeout_ms=timeout_ms,
        )

    @classmethod
    def stream_error(cls, cause: Any) -> StreamError:
        """Streaming transport failed after the request was issued."""
        return StreamError("Stream failed", code=ErrorCode.STREAM_ERROR, cause=cause)


class HTTPError(StromboliError):
    """The API answered with a non-success status."""

    def __init__(self, message: str, status: int, cause: Any = None):
        super().__init__(message, ErrorCode.HTTP_ERROR, status=status, cause=cause)


class NetworkError(StromboliError):
    """The request never produced an HTTP response (DNS, refused, reset...)."""

    def __init__(self, message: str = "Network request failed", cause: Any = None):
        super().__init__(message, ErrorCode.NETWORK_ERROR, cause=cause)


class RequestTimeoutError(StromboliError):
    """The request, or a wait built on requests, ran out of time.

    Attributes:
        timeout_ms: The limit that was exceeded, in milliseconds.
    """

    def __init__(self, message: str, timeout_ms: float | None = None):
        super().__init__(message, ErrorCode.TIMEOUT_ERROR)
        self.timeout_ms = timeout_ms


class AbortedError(StromboliError):
    """The caller cancelled the request through a CancelToken."""

    def __init__(self, message: str = "Request was aborted"):
        super().__init__(message, ErrorCode.ABORTED)


class StreamError(StromboliError):
    """Failure specific to the SSE stream.

    The code is one of CONNECTION_TIMEOUT, IDLE_TIMEOUT or STREAM_ERROR.

    Attributes:
        timeout_ms: The timeout that fired, for the two timeout codes.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.STREAM_ERROR,
        timeout_ms: float | None = None,
        cause: Any = None,
    ):
        if code not in _STREAM_CODES:
            raise ValueError(f"{code} is not a stream error code")
        super().__init__(message, code, cause=cause)
        self.timeout_ms = timeout_ms


class ConfigurationError(StromboliError):
    """Raised when client configuration is invalid.

    Example:
        try:
            config = ClientConfig(base_url="", timeout_ms=0)
        except ConfigurationError as e:
            logger.error(f"Invalid configuration: {e}")
            raise SystemExit(1)
    """

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR)


def _format_ms(value: float) -> str:
    # 30000.0 -> "30000", 12.5 -> "12.5"
    if float(value).is_integer():
        return str(int(value))
    return str(value)


__all__ = [
    "AbortedError",
    "ConfigurationError",
    "ErrorCode",
    "HTTPError",
    "NetworkError",
    "RequestTimeoutError",
    "StreamError",
    "StromboliError",
]
