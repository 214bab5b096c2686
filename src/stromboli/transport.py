# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
httpx-backed transport.

HttpxTransport performs exactly one HTTP exchange per call. It does not
retry, time out or classify errors; the executor and the stream reader do
that. Non-2xx responses are returned, not raised.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import httpx

from .protocols.transport import StreamingResponseProtocol, TransportResponse
from .types.operation import Operation

logger = logging.getLogger(__name__)


class HttpxTransport:
    """
    Transport backed by an ``httpx.AsyncClient``.

    Args:
        base_url: API base URL, used when no client is injected
        http_client: Optional pre-configured client. An injected client is
            not closed by ``aclose()``; its ``base_url`` is used as-is.

    Example:
        >>> transport = HttpxTransport("http://localhost:8585")
        >>> response = await transport.perform(
        ...     Operation("GET", "/jobs/{id}", path_params={"id": "job-1"}), {}
        ... )
        >>> response.status
        200
    """

    def __init__(
        self,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        if http_client is None and not base_url:
            raise ValueError("base_url is required when http_client is not given")
        self._owns_client = http_client is None
        # Deadlines are enforced by the caller, so the client itself never times out.
        self._client = http_client or httpx.AsyncClient(base_url=base_url, timeout=None)

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def perform(
        self, operation: Operation, headers: Mapping[str, str]
    ) -> TransportResponse:
        """Send one request and return its status and parsed body."""
        url = render_path(operation.path, operation.path_params)
        kwargs: dict[str, Any] = {"headers": dict(headers)}
        params = _compact_query(operation.query)
        if params:
            kwargs["params"] = params
        if operation.body is not None:
            kwargs["json"] = operation.body

        response = await self._client.request(operation.method, url, **kwargs)
        payload = _parse_body(response)
        if response.is_success:
            return TransportResponse(
                status=response.status_code,
                data=payload if not isinstance(payload, str) else None,
                url=str(response.url),
            )
        return TransportResponse(
            status=response.status_code,
            error=payload,
            url=str(response.url),
        )

    async def open_stream(
        self,
        path: str,
        query: Mapping[str, Any],
        headers: Mapping[str, str],
    ) -> StreamingResponseProtocol:
        """Send a GET and return the response as soon as headers arrive."""
        request = self._client.build_request(
            "GET", path, params=_compact_query(query), headers=dict(headers)
        )
        return await self._client.send(request, stream=True)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HttpxTransport:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


def render_path(template: str, params: Mapping[str, str]) -> str:
    """
    Substitute ``{name}`` placeholders with URL-quoted values.

    Example:
        >>> render_path("/sessions/{id}/messages", {"id": "sess 1"})
        '/sessions/sess%201/messages'
    """
    path = template
    for name, value in params.items():
        path = path.replace(f"{{{name}}}", quote(str(value), safe=""))
    return path


def _compact_query(query: Mapping[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in query.items() if value is not None}


def _parse_body(response: httpx.Response) -> Any:
    """Parsed JSON body, raw text for non-JSON bodies, or None when empty."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        logger.debug(
            f"Non-JSON body from {response.request.method} {response.url} "
            f"(status {response.status_code})"
        )
        return response.text


__all__ = ["HttpxTransport", "render_path"]
