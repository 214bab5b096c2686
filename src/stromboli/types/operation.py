# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request lifecycle types.

An Operation describes one logical API call and is immutable. The executor
derives a mutable RequestContext from it for every attempt, which is what the
``on_request`` hook sees and may modify. ``on_response`` receives the narrowed
InterceptorResponse view rather than the transport's response object.
"""

from __future__ import annotations

import secrets
import string
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

_BASE36_ALPHABET = string.digits + string.ascii_lowercase


@dataclass(frozen=True)
class Operation:
    """
    Description of one remote call.

    Attributes:
        method: HTTP method (upper case)
        path: Path template, e.g. ``/jobs/{id}``
        path_params: Values substituted into the path template
        query: Query parameters; ``None`` values are dropped by the transport
        body: JSON body for POST requests
        expect_body: When False, a success response with no body is not an error
        name: Operation name used in logs and metric labels
    """

    method: str
    path: str
    path_params: Mapping[str, str] = field(default_factory=dict)
    query: Mapping[str, Any] = field(default_factory=dict)
    body: Any = None
    expect_body: bool = True
    name: str = ""

    @property
    def label(self) -> str:
        """Operation name, falling back to ``METHOD path``."""
        return self.name or f"{self.method} {self.path}"


@dataclass
class RequestContext:
    """
    Mutable per-attempt request state passed to the ``on_request`` hook.

    Hooks may add, change or remove headers. The method and path are
    informational; changing them has no effect on the request.
    """

    method: str
    path: str
    headers: dict[str, str]
    attempt: int
    request_id: str


@dataclass(frozen=True)
class InterceptorResponse:
    """Narrowed view of a transport response passed to ``on_response``."""

    status: int
    ok: bool
    url: str


def generate_request_id() -> str:
    """
    Build a correlation id of the form ``req_{base36 ms timestamp}_{suffix}``.

    Example:
        >>> generate_request_id()  # doctest: +SKIP
        'req_m2f9x1k3_7q0c2b1'
    """
    timestamp = _to_base36(int(time.time() * 1000))
    suffix = "".join(secrets.choice(_BASE36_ALPHABET) for _ in range(7))
    return f"req_{timestamp}_{suffix}"


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


__all__ = [
    "InterceptorResponse",
    "Operation",
    "RequestContext",
    "generate_request_id",
]
