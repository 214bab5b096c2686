"""Unit tests for job types."""

import pytest

from stromboli.types.jobs import (
    TERMINAL_STATUSES,
    JobListResponse,
    JobResponse,
    JobStatus,
    parse_status,
)
from tests.factories import make_crashed_job, make_job


class TestJobStatus:
    """Tests for status parsing and terminal detection."""

    def test_terminal_statuses(self):
        assert TERMINAL_STATUSES == {"completed", "failed", "crashed", "cancelled"}

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("running", JobStatus.RUNNING),
            ("crashed", JobStatus.CRASHED),
            (None, JobStatus.PENDING),
        ],
    )
    def test_parse_known(self, value, expected):
        assert parse_status(value) is expected

    def test_unknown_status_kept_as_string(self):
        assert parse_status("paused") == "paused"

    def test_str_is_wire_value(self):
        assert str(JobStatus.CANCELLED) == "cancelled"


class TestJobResponse:
    """Tests for JobResponse parsing."""

    def test_completed_job(self):
        job = JobResponse.from_dict(make_job(id="job-1", output="All done"))
        assert job.id == "job-1"
        assert job.status is JobStatus.COMPLETED
        assert job.output == "All done"
        assert job.is_terminal
        assert job.crash_info is None

    @pytest.mark.parametrize("status", ["pending", "running", "paused"])
    def test_non_terminal(self, status):
        assert not JobResponse.from_dict(make_job(status=status)).is_terminal

    def test_crash_info(self):
        job = JobResponse.from_dict(make_crashed_job())
        assert job.status is JobStatus.CRASHED
        assert job.is_terminal
        assert job.error == "container exited unexpectedly"
        assert job.crash_info.reason == "OOMKilled"
        assert job.crash_info.exit_code == 137
        assert job.crash_info.signal == "SIGKILL"
        assert job.crash_info.partial_output == "Analyzing files..."
        assert job.crash_info.task_completed is False

    def test_malformed_crash_info_ignored(self):
        job = JobResponse.from_dict(make_job(crash_info="boom"))
        assert job.crash_info is None


class TestJobListResponse:
    def test_parses_jobs(self):
        data = {"jobs": [make_job(status="running"), make_crashed_job()]}
        jobs = JobListResponse.from_dict(data).jobs
        assert [job.status for job in jobs] == [JobStatus.RUNNING, JobStatus.CRASHED]

    def test_null_jobs(self):
        assert JobListResponse.from_dict({"jobs": None}).jobs == []
