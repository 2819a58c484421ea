# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""httpx transport construction and response/error translation.

Authentication is owned elsewhere: callers pass a `token_provider` that
returns the current bearer token (or None), and it is consulted on every
request.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import httpx

from adminkit.config import AdminKitSettings
from adminkit.errors import (
    HttpError,
    NetworkError,
    NotFoundError,
    ResponseFormatError,
    ValidationError,
)

logger = logging.getLogger(__name__)

__all__ = (
    "TokenProvider",
    "build_http_client",
    "decode_response",
    "error_from_response",
    "parse_validation_errors",
    "translate_transport_error",
)

TokenProvider = Callable[[], "str | None"]


def build_http_client(
    settings: AdminKitSettings,
    token_provider: TokenProvider | None = None,
    **kwargs: Any,
) -> httpx.AsyncClient:
    """AsyncClient preconfigured with base URL, timeout and auth headers.

    Extra kwargs (e.g. `transport=httpx.MockTransport(...)`) pass through.
    """
    headers = {"Accept": "application/json", "Content-Type": "application/json"}
    if settings.api_key:
        headers["X-API-KEY"] = settings.api_key

    async def _attach_token(request: httpx.Request) -> None:
        if token_provider is None:
            return
        token = token_provider()
        if token:
            request.headers[settings.auth_header] = f"Bearer {token}"
        else:
            logger.debug("No auth token available for %s %s", request.method, request.url)

    return httpx.AsyncClient(
        base_url=settings.api_base_url,
        timeout=settings.api_timeout,
        headers=headers,
        event_hooks={"request": [_attach_token]},
        **kwargs,
    )


def parse_validation_errors(body: Any) -> dict[str, list[str]]:
    """Extract a field -> messages map from a 422-style body."""
    if not isinstance(body, dict) or not isinstance(body.get("errors"), dict):
        return {}
    out: dict[str, list[str]] = {}
    for field_name, messages in body["errors"].items():
        if isinstance(messages, (list, tuple)):
            out[str(field_name)] = [str(m) for m in messages]
        else:
            out[str(field_name)] = [str(messages)]
    return out


def _body_of(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def error_from_response(response: httpx.Response) -> HttpError:
    """Map a non-2xx response onto the error taxonomy."""
    status = response.status_code
    body = _body_of(response)
    message = None
    if isinstance(body, dict):
        message = body.get("message") or body.get("error")
    message = str(message) if message else f"HTTP Error {status}"
    details = {"method": response.request.method, "url": str(response.request.url)}

    if status == 404:
        return NotFoundError(message, status=status, body=body, details=details)
    if status == 422:
        return ValidationError(
            message,
            status=status,
            body=body,
            validation_errors=parse_validation_errors(body),
            details=details,
        )
    return HttpError(message, status=status, body=body, details=details)


def decode_response(response: httpx.Response) -> Any:
    """Decoded JSON body of a response, raising taxonomy errors on failure.

    Raises:
        HttpError: For non-2xx statuses (or a subclass).
        ResponseFormatError: For a 2xx body that is not JSON.
    """
    if not response.is_success:
        raise error_from_response(response)
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as e:
        raise ResponseFormatError(
            "Malformed response body",
            status=response.status_code,
            body=response.text,
            details={"url": str(response.request.url)},
        ) from e


def translate_transport_error(error: httpx.TransportError) -> NetworkError:
    return NetworkError(
        "Could not connect to the server",
        details={"reason": str(error) or type(error).__name__},
    )
