# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Session lifecycle and history types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class SessionListResponse:
    """Result of ``GET /sessions``. Older servers return objects, newer plain ids."""

    sessions: list[str] = field(default_factory=list)
    error: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SessionListResponse:
        sessions = []
        for entry in data.get("sessions") or []:
            if isinstance(entry, dict):
                sessions.append(entry.get("id") or "")
            else:
                sessions.append(str(entry))
        return cls(sessions=sessions, error=data.get("error"))


@dataclass
class SessionMessagesResponse:
    """One page of session history from ``GET /sessions/{id}/messages``.

    Messages are returned as raw dicts; their shape follows Claude Code's
    transcript format and changes between Claude Code versions.
    """

    messages: list[dict[str, Any]] = field(default_factory=list)
    total: int = 0
    limit: int = 0
    offset: int = 0
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SessionMessagesResponse:
        messages = data.get("messages") or []
        return cls(
            messages=list(messages),
            total=data.get("total", len(messages)),
            limit=data.get("limit", 0),
            offset=data.get("offset", 0),
            has_more=bool(data.get("has_more", False)),
        )


@dataclass
class SessionDestroyResponse:
    """Result of ``DELETE /sessions/{id}``."""

    success: bool = False
    session_id: str = ""
    error: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SessionDestroyResponse:
        return cls(
            success=bool(data.get("success", False)),
            session_id=data.get("session_id") or "",
            error=data.get("error"),
        )


__all__ = [
    "SessionDestroyResponse",
    "SessionListResponse",
    "SessionMessagesResponse",
]
