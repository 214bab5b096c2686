# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Asynchronous job types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class JobStatus(str, Enum):
    """Job lifecycle states reported by the API.

    - PENDING / RUNNING: job still in progress
    - COMPLETED: finished, ``output`` holds the result
    - FAILED: Claude reported an error
    - CRASHED: the container died; see ``crash_info``
    - CANCELLED: cancelled through ``DELETE /jobs/{id}``
    """

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CRASHED = "crashed"
    CANCELLED = "cancelled"

    def __str__(self) -> str:
        return self.value


TERMINAL_STATUSES: frozenset[str] = frozenset(
    {
        JobStatus.COMPLETED.value,
        JobStatus.FAILED.value,
        JobStatus.CRASHED.value,
        JobStatus.CANCELLED.value,
    }
)


def parse_status(value: Any) -> JobStatus | str:
    """Map a wire status to JobStatus, keeping unknown values as plain strings."""
    if value is None:
        return JobStatus.PENDING
    try:
        return JobStatus(value)
    except ValueError:
        return str(value)


@dataclass
class CrashInfo:
    """Details attached to a crashed job."""

    reason: str | None = None
    exit_code: int | None = None
    signal: str | None = None
    partial_output: str | None = None
    task_completed: bool | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CrashInfo:
        return cls(
            reason=data.get("reason"),
            exit_code=data.get("exit_code"),
            signal=data.get("signal"),
            partial_output=data.get("partial_output"),
            task_completed=data.get("task_completed"),
        )


@dataclass
class JobResponse:
    """Full job record from ``GET /jobs/{id}``."""

    id: str = ""
    status: JobStatus | str = JobStatus.PENDING
    output: str | None = None
    error: str | None = None
    session_id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    crash_info: CrashInfo | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def is_terminal(self) -> bool:
        return str(self.status) in TERMINAL_STATUSES

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> JobResponse:
        crash = data.get("crash_info")
        return cls(
            id=data.get("id") or "",
            status=parse_status(data.get("status")),
            output=data.get("output"),
            error=data.get("error"),
            session_id=data.get("session_id"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
            crash_info=CrashInfo.from_dict(crash) if isinstance(crash, dict) else None,
            raw=data,
        )


@dataclass
class JobListResponse:
    """Result of ``GET /jobs``."""

    jobs: list[JobResponse] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> JobListResponse:
        return cls(jobs=[JobResponse.from_dict(job) for job in data.get("jobs") or []])


__all__ = [
    "TERMINAL_STATUSES",
    "CrashInfo",
    "JobListResponse",
    "JobResponse",
    "JobStatus",
    "parse_status",
]
