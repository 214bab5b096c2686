# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Run request and response types.

Two request shapes are accepted by the client:

* RunRequest mirrors the API body: top-level prompt/workdir/webhook_url plus
  nested ``claude`` and ``podman`` option objects.
* SimpleRunRequest is a flat convenience shape that is converted to a
  RunRequest before sending.

Fields left as ``None`` are omitted from the wire body.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Literal

Model = Literal["sonnet", "opus", "haiku"]


def _compact(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


@dataclass
class ClaudeOptions:
    """Options forwarded to Claude Code inside the container."""

    model: Model | None = None
    session_id: str | None = None
    resume: bool | None = None
    max_budget_usd: float | None = None
    system_prompt: str | None = None
    append_system_prompt: str | None = None
    allowed_tools: list[str] | None = None
    disallowed_tools: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({f.name: getattr(self, f.name) for f in fields(self)})


@dataclass
class PodmanOptions:
    """Container limits. Durations and sizes use Podman notation ("5m", "512m")."""

    timeout: str | None = None
    memory: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({f.name: getattr(self, f.name) for f in fields(self)})


@dataclass
class RunRequest:
    """Full API request for ``POST /run`` and ``POST /run/async``."""

    prompt: str
    workdir: str | None = None
    webhook_url: str | None = None
    claude: ClaudeOptions | None = None
    podman: PodmanOptions | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "prompt": self.prompt,
            "workdir": self.workdir,
            "webhook_url": self.webhook_url,
        }
        if self.claude is not None:
            claude = self.claude.to_dict()
            if claude:
                body["claude"] = claude
        if self.podman is not None:
            podman = self.podman.to_dict()
            if podman:
                body["podman"] = podman
        return _compact(body)


@dataclass
class SimpleRunRequest:
    """
    Flat convenience request.

    Example:
        >>> SimpleRunRequest(prompt="Hi", model="haiku", memory="1g").to_dict()
        {'prompt': 'Hi', 'claude': {'model': 'haiku'}, 'podman': {'memory': '1g'}}
    """

    prompt: str
    model: Model | None = None
    workdir: str | None = None
    webhook_url: str | None = None
    session_id: str | None = None
    resume: bool | None = None
    timeout: str | None = None
    memory: str | None = None
    max_budget_usd: float | None = None
    system_prompt: str | None = None
    append_system_prompt: str | None = None
    allowed_tools: list[str] | None = None
    disallowed_tools: list[str] | None = None

    def to_run_request(self) -> RunRequest:
        claude = ClaudeOptions(
            model=self.model,
            session_id=self.session_id,
            resume=self.resume,
            max_budget_usd=self.max_budget_usd,
            system_prompt=self.system_prompt,
            append_system_prompt=self.append_system_prompt,
            allowed_tools=self.allowed_tools,
            disallowed_tools=self.disallowed_tools,
        )
        podman = PodmanOptions(timeout=self.timeout, memory=self.memory)
        return RunRequest(
            prompt=self.prompt,
            workdir=self.workdir,
            webhook_url=self.webhook_url,
            claude=claude,
            podman=podman,
        )

    def to_dict(self) -> dict[str, Any]:
        return self.to_run_request().to_dict()


@dataclass
class RunResponse:
    """Result of a synchronous run."""

    id: str = ""
    status: str = ""
    output: str | None = None
    session_id: str | None = None
    error: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RunResponse:
        return cls(
            id=data.get("id") or "",
            status=data.get("status") or "",
            output=data.get("output"),
            session_id=data.get("session_id"),
            error=data.get("error"),
            raw=data,
        )


@dataclass
class AsyncRunResponse:
    """Handle returned by ``POST /run/async``."""

    job_id: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AsyncRunResponse:
        return cls(job_id=data.get("job_id") or "")


__all__ = [
    "AsyncRunResponse",
    "ClaudeOptions",
    "Model",
    "PodmanOptions",
    "RunRequest",
    "RunResponse",
    "SimpleRunRequest",
]
