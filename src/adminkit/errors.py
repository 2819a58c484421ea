# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Error taxonomy shared by the API client, containers and hooks.

Every failure that crosses the client boundary is one of:
- NetworkError: no response reached us from the server
- HttpError: non-2xx response (status + decoded body)
- ValidationError: 422-style body with a field -> messages map
- NotFoundError: 404 on an id lookup
- ResponseFormatError: 2xx response whose body is not JSON
- ConfigurationError: operation forbidden by the resource's ModelConfig
"""

from __future__ import annotations

from typing import Any

__all__ = (
    "AdminKitError",
    "ConfigurationError",
    "HttpError",
    "NetworkError",
    "NotFoundError",
    "ResponseFormatError",
    "ValidationError",
)


class AdminKitError(Exception):
    """Base error with a human-readable message and structured details."""

    status: int | None = None

    def __init__(self, message: str, *, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logging or UI display."""
        out: dict[str, Any] = {"type": type(self).__name__, "message": self.message}
        if self.status is not None:
            out["status"] = self.status
        if self.details:
            out["details"] = self.details
        return out

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class NetworkError(AdminKitError):
    """Request never produced a response (DNS, refused connection, timeout)."""


class ConfigurationError(AdminKitError):
    """Operation attempted on a resource whose config forbids it."""


class HttpError(AdminKitError):
    """Server answered with a non-2xx status."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        body: Any = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details=details)
        self.status = status
        self.body = body


class NotFoundError(HttpError):
    """Backend returned 404 for the requested id or path."""


class ResponseFormatError(HttpError):
    """Successful status with a body that could not be decoded."""


class ValidationError(HttpError):
    """422-style rejection carrying per-field messages."""

    def __init__(
        self,
        message: str,
        *,
        status: int = 422,
        body: Any = None,
        validation_errors: dict[str, list[str]] | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, status=status, body=body, details=details)
        self.validation_errors = validation_errors or {}

    def to_dict(self) -> dict[str, Any]:
        out = super().to_dict()
        out["validation_errors"] = self.validation_errors
        return out
