"""Unit tests for StreamState and StreamContext."""

from unittest.mock import patch

import pytest

from stromboli.exceptions import StromboliError
from stromboli.streaming.context import StreamContext, StreamState


class TestStreamState:
    @pytest.mark.parametrize(
        "state,terminal",
        [
            (StreamState.CONNECTING, False),
            (StreamState.STREAMING, False),
            (StreamState.COMPLETED, True),
            (StreamState.ABORTED, True),
            (StreamState.FAILED, True),
        ],
    )
    def test_is_terminal(self, state, terminal):
        assert state.is_terminal is terminal


class TestStreamContext:
    """Tests for StreamContext bookkeeping."""

    def test_initial_state(self):
        ctx = StreamContext(request_id="req_1_abc", prompt="Hi")
        assert ctx.chunk_count == 0
        assert ctx.byte_count == 0
        assert ctx.event_count == 0
        assert ctx.connected_at is None
        assert ctx.finished_at is None
        assert ctx.error is None

    def test_record_chunk(self):
        ctx = StreamContext(request_id="req_1_abc")
        ctx.record_chunk(10)
        ctx.record_chunk(5)
        assert ctx.chunk_count == 2
        assert ctx.byte_count == 15
        assert ctx.last_chunk_at is not None

    def test_record_event(self):
        ctx = StreamContext(request_id="req_1_abc")
        ctx.record_event("content")
        ctx.record_event("content")
        ctx.record_event("done")
        assert ctx.event_counts == {"content": 2, "done": 1}
        assert ctx.event_count == 3

    def test_first_finish_wins(self):
        ctx = StreamContext(request_id="req_1_abc")
        error = StromboliError.idle_timeout(100)
        ctx.record_finished(error)
        first = ctx.finished_at
        ctx.record_finished(None)
        assert ctx.finished_at == first
        assert ctx.error is error

    def test_duration(self):
        with patch("stromboli.streaming.context.time.time", return_value=100.0):
            ctx = StreamContext(request_id="req_1_abc")
        with patch("stromboli.streaming.context.time.time", return_value=102.5):
            ctx.record_finished()
        assert ctx.duration_seconds == pytest.approx(2.5)

    def test_repr_hides_prompt(self):
        ctx = StreamContext(request_id="req_1_abc", prompt="secret plans")
        assert "secret plans" not in repr(ctx)
