"""Unit tests for HttpxTransport, served by httpx.MockTransport."""

from __future__ import annotations

import json

import httpx
import pytest

from stromboli.protocols.transport import TransportProtocol
from stromboli.transport import HttpxTransport, render_path
from stromboli.types.operation import Operation
from tests.factories import BASE_URL


def make_transport(handler) -> HttpxTransport:
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url=BASE_URL
    )
    return HttpxTransport(http_client=client)


class TestRenderPath:
    """Tests for render_path()."""

    def test_substitutes_placeholders(self):
        assert render_path("/jobs/{id}", {"id": "job-1"}) == "/jobs/job-1"

    def test_quotes_values(self):
        assert render_path("/sessions/{id}", {"id": "a/b c"}) == "/sessions/a%2Fb%20c"

    def test_no_params(self):
        assert render_path("/health", {}) == "/health"


class TestPerform:
    """Tests for HttpxTransport.perform()."""

    @pytest.mark.asyncio
    async def test_success_json(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"id": "job-1"})

        transport = make_transport(handler)
        response = await transport.perform(
            Operation("GET", "/jobs/{id}", path_params={"id": "job-1"}),
            {"X-Request-ID": "req_1_abc"},
        )

        assert response.ok
        assert response.status == 200
        assert response.data == {"id": "job-1"}
        assert response.error is None
        assert response.url == f"{BASE_URL}/jobs/job-1"
        assert seen[0].headers["X-Request-ID"] == "req_1_abc"

    @pytest.mark.asyncio
    async def test_error_body_returned_not_raised(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"error": "Job not found"})

        transport = make_transport(handler)
        response = await transport.perform(Operation("GET", "/jobs/x"), {})

        assert not response.ok
        assert response.status == 404
        assert response.error == {"error": "Job not found"}
        assert response.data is None

    @pytest.mark.asyncio
    async def test_plain_text_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="Bad Gateway")

        transport = make_transport(handler)
        response = await transport.perform(Operation("GET", "/health"), {})

        assert response.error == "Bad Gateway"

    @pytest.mark.asyncio
    async def test_empty_success_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(204)

        transport = make_transport(handler)
        response = await transport.perform(Operation("DELETE", "/jobs/x"), {})

        assert response.ok
        assert response.data is None

    @pytest.mark.asyncio
    async def test_non_json_success_body_has_no_data(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>proxy</html>")

        transport = make_transport(handler)
        response = await transport.perform(Operation("GET", "/health"), {})

        assert response.ok
        assert response.data is None

    @pytest.mark.asyncio
    async def test_query_and_body(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        transport = make_transport(handler)
        await transport.perform(
            Operation(
                "POST",
                "/run",
                query={"limit": 10, "offset": None},
                body={"prompt": "Hello"},
            ),
            {},
        )

        request = seen[0]
        assert request.method == "POST"
        assert dict(request.url.params) == {"limit": "10"}
        assert json.loads(request.content) == {"prompt": "Hello"}

    @pytest.mark.asyncio
    async def test_connection_errors_raise(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        transport = make_transport(handler)
        with pytest.raises(httpx.ConnectError):
            await transport.perform(Operation("GET", "/health"), {})


class TestOpenStream:
    """Tests for HttpxTransport.open_stream()."""

    @pytest.mark.asyncio
    async def test_returns_unread_response(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, content=b"data: hi\n\n")

        transport = make_transport(handler)
        response = await transport.open_stream(
            "/run/stream",
            {"prompt": "Hi", "session_id": None},
            {"Accept": "text/event-stream"},
        )

        chunks = [chunk async for chunk in response.aiter_bytes()]
        await response.aclose()

        assert response.status_code == 200
        assert b"".join(chunks) == b"data: hi\n\n"
        assert dict(seen[0].url.params) == {"prompt": "Hi"}
        assert seen[0].headers["Accept"] == "text/event-stream"


class TestLifecycle:
    """Tests for client ownership."""

    def test_requires_base_url_or_client(self):
        with pytest.raises(ValueError, match="base_url"):
            HttpxTransport()

    @pytest.mark.asyncio
    async def test_satisfies_protocol(self) -> None:
        async with HttpxTransport(BASE_URL) as transport:
            assert isinstance(transport, TransportProtocol)

    @pytest.mark.asyncio
    async def test_owned_client_closed(self) -> None:
        transport = HttpxTransport(BASE_URL)
        await transport.aclose()
        assert transport.client.is_closed

    @pytest.mark.asyncio
    async def test_injected_client_left_open(self) -> None:
        client = httpx.AsyncClient(base_url=BASE_URL)
        async with HttpxTransport(http_client=client):
            pass
        assert not client.is_closed
        await client.aclose()
