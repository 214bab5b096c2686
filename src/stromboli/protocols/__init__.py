# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Protocol definitions for pluggable client components.

Available protocols:
- TransportProtocol: Interface for the HTTP transport behind the executor
- StreamingResponseProtocol: Interface for an open streaming response

Supporting types:
- TransportResponse: Status and parsed body of one transport call
"""

from .transport import (
    StreamingResponseProtocol,
    TransportProtocol,
    TransportResponse,
)

__all__ = [
    "StreamingResponseProtocol",
    "TransportProtocol",
    "TransportResponse",
]
