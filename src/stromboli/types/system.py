# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Health, Claude configuration and secrets types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ComponentHealth:
    name: str = ""
    status: str = ""
    error: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ComponentHealth:
        return cls(
            name=data.get("name") or "",
            status=data.get("status") or "",
            error=data.get("error"),
        )


@dataclass
class HealthResponse:
    """Result of ``GET /health``."""

    name: str = ""
    status: str = "unknown"
    version: str = "unknown"
    components: list[ComponentHealth] = field(default_factory=list)

    @property
    def is_healthy(self) -> bool:
        return self.status == "ok" and all(c.status == "ok" for c in self.components)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HealthResponse:
        return cls(
            name=data.get("name") or "",
            status=data.get("status") or "unknown",
            version=data.get("version") or "unknown",
            components=[
                ComponentHealth.from_dict(c) for c in data.get("components") or []
            ],
        )


@dataclass
class ClaudeStatusResponse:
    """Result of ``GET /claude/status``."""

    configured: bool = False
    message: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ClaudeStatusResponse:
        return cls(
            configured=bool(data.get("configured", False)),
            message=data.get("message"),
        )


@dataclass
class SecretsListResponse:
    """Result of ``GET /secrets``: names only, never values."""

    secrets: list[str] = field(default_factory=list)
    error: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SecretsListResponse:
        return cls(
            secrets=[str(s) for s in data.get("secrets") or []],
            error=data.get("error"),
        )


__all__ = [
    "ClaudeStatusResponse",
    "ComponentHealth",
    "HealthResponse",
    "SecretsListResponse",
]
