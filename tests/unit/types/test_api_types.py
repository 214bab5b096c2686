"""Unit tests for system, session, auth and request lifecycle types."""

import re
from unittest.mock import patch

from stromboli.types.auth import LogoutResponse, TokenResponse, ValidateResponse
from stromboli.types.operation import Operation, generate_request_id
from stromboli.types.sessions import (
    SessionDestroyResponse,
    SessionListResponse,
    SessionMessagesResponse,
)
from stromboli.types.system import HealthResponse
from tests.factories import (
    make_health_response,
    make_session_messages,
    make_token_response,
)


class TestOperation:
    def test_label_prefers_name(self):
        assert Operation("GET", "/health", name="health").label == "health"

    def test_label_falls_back_to_method_and_path(self):
        assert Operation("GET", "/jobs/{id}").label == "GET /jobs/{id}"

    def test_defaults(self):
        operation = Operation("GET", "/health")
        assert operation.expect_body is True
        assert operation.body is None
        assert dict(operation.query) == {}


class TestGenerateRequestId:
    """Tests for correlation id generation."""

    def test_format(self):
        assert re.fullmatch(r"req_[0-9a-z]+_[0-9a-z]{7}", generate_request_id())

    def test_timestamp_is_base36_milliseconds(self):
        with patch("stromboli.types.operation.time.time", return_value=36.0):
            request_id = generate_request_id()
        # 36000 ms == "rs0" in base 36
        assert request_id.startswith("req_rs0_")

    def test_unique(self):
        assert len({generate_request_id() for _ in range(100)}) == 100


class TestHealthResponse:
    def test_healthy(self):
        health = HealthResponse.from_dict(make_health_response())
        assert health.is_healthy
        assert health.version == "0.3.2"

    def test_unhealthy_component(self):
        data = make_health_response(
            components=[{"name": "podman", "status": "error", "error": "not found"}]
        )
        health = HealthResponse.from_dict(data)
        assert not health.is_healthy
        assert health.components[0].error == "not found"

    def test_missing_version(self):
        assert HealthResponse.from_dict({"status": "ok"}).version == "unknown"


class TestSessionTypes:
    def test_list_accepts_ids_and_objects(self):
        data = {"sessions": ["sess-1", {"id": "sess-2", "created_at": "2026-01-01"}]}
        assert SessionListResponse.from_dict(data).sessions == ["sess-1", "sess-2"]

    def test_messages_page(self):
        page = SessionMessagesResponse.from_dict(make_session_messages(count=2))
        assert len(page.messages) == 2
        assert page.total == 2
        assert page.limit == 50
        assert page.has_more is False

    def test_messages_total_defaults_to_page_size(self):
        page = SessionMessagesResponse.from_dict({"messages": [{"uuid": "m1"}]})
        assert page.total == 1

    def test_destroy(self):
        result = SessionDestroyResponse.from_dict({"success": True, "session_id": "s"})
        assert result.success is True
        assert result.session_id == "s"


class TestAuthTypes:
    def test_token_response(self):
        tokens = TokenResponse.from_dict(make_token_response())
        assert tokens.access_token == "access-abc123"
        assert tokens.refresh_token == "refresh-def456"
        assert tokens.expires_in == 3600
        assert tokens.token_type == "Bearer"

    def test_token_repr_masks_credentials(self):
        tokens = TokenResponse.from_dict(make_token_response())
        assert "access-abc123" not in repr(tokens)
        assert "refresh-def456" not in repr(tokens)

    def test_validate_response(self):
        result = ValidateResponse.from_dict({"valid": True, "subject": "ci"})
        assert result.valid is True
        assert result.subject == "ci"

    def test_logout_response(self):
        assert LogoutResponse.from_dict({"success": True}).success is True
