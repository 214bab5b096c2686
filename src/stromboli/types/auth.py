# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Credential lifecycle types for the ``/auth`` endpoints."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class TokenResponse:
    """Tokens issued by ``POST /auth/token`` and ``POST /auth/refresh``."""

    access_token: str = ""
    refresh_token: str | None = None
    expires_in: int | None = None
    token_type: str = "Bearer"

    def __repr__(self) -> str:
        # Keep credentials out of logs and tracebacks.
        return (
            f"TokenResponse(access_token='***', "
            f"refresh_token={'***' if self.refresh_token else None!r}, "
            f"expires_in={self.expires_in!r}, token_type={self.token_type!r})"
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TokenResponse:
        return cls(
            access_token=data.get("access_token") or "",
            refresh_token=data.get("refresh_token"),
            expires_in=data.get("expires_in"),
            token_type=data.get("token_type") or "Bearer",
        )


@dataclass
class ValidateResponse:
    """Claims of the current token from ``GET /auth/validate``."""

    valid: bool = False
    subject: str | None = None
    expires_at: int | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValidateResponse:
        return cls(
            valid=bool(data.get("valid", False)),
            subject=data.get("subject"),
            expires_at=data.get("expires_at"),
            raw=data,
        )


@dataclass
class LogoutResponse:
    """Result of ``POST /auth/logout``."""

    success: bool = False
    message: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LogoutResponse:
        return cls(
            success=bool(data.get("success", False)),
            message=data.get("message"),
        )


__all__ = [
    "LogoutResponse",
    "TokenResponse",
    "ValidateResponse",
]
