# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""GenericApiClient: CRUD and custom actions for any registered resource.

Endpoints come from the ModelRegistry, so the client never needs to know
about individual resources. Every failure leaves the client as an
AdminKitError subclass; raw httpx exceptions never escape.

Example:
    async with GenericApiClient.from_settings(registry=build_default_registry()) as api:
        page = await api.list("categories", ListParams(page=2, filters={"active": 1}))
        item = await api.get("categories", 7)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Literal

import httpx

from adminkit.config import AdminKitSettings, get_settings
from adminkit.errors import AdminKitError, ResponseFormatError
from adminkit.registry.registry import ModelRegistry

from .normalize import ListResult, normalize_item, normalize_list
from .params import ListParams, build_query_params
from .retry import retry_read
from .transport import (
    TokenProvider,
    build_http_client,
    decode_response,
    translate_transport_error,
)

logger = logging.getLogger(__name__)

__all__ = ("EndpointProbe", "GenericApiClient", "HttpMethod")

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]

_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


@dataclass(frozen=True)
class EndpointProbe:
    """Outcome of test_endpoint()."""

    success: bool
    message: str
    error: AdminKitError | None = None


class GenericApiClient:
    """Registry-driven REST client.

    Attributes:
        http: Underlying httpx.AsyncClient (base URL and auth already set)
        registry: ModelRegistry resolving endpoints per resource
        max_read_attempts: Attempts for list/get; writes are sent once
        retry_delay: Base backoff in seconds between read attempts
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        registry: ModelRegistry,
        *,
        max_read_attempts: int = 3,
        retry_delay: float = 1.0,
    ) -> None:
        self.http = http
        self.registry = registry
        self.max_read_attempts = max_read_attempts
        self.retry_delay = retry_delay

    @classmethod
    def from_settings(
        cls,
        settings: AdminKitSettings | None = None,
        *,
        registry: ModelRegistry,
        token_provider: TokenProvider | None = None,
        **http_kwargs: Any,
    ) -> GenericApiClient:
        settings = settings or get_settings()
        return cls(
            build_http_client(settings, token_provider, **http_kwargs),
            registry,
            max_read_attempts=settings.max_read_attempts,
            retry_delay=settings.retry_delay,
        )

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        payload: Any = None,
    ) -> Any:
        logger.debug("%s %s params=%s", method, path, params)
        kwargs: dict[str, Any] = {"params": params}
        if method in _BODY_METHODS and payload is not None:
            kwargs["json"] = payload
        try:
            response = await self.http.request(method, path, **kwargs)
        except httpx.RequestError as e:
            raise translate_transport_error(e) from e
        return decode_response(response)

    async def _read(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await retry_read(
            lambda: self._send("GET", path, params=params),
            attempts=self.max_read_attempts,
            delay=self.retry_delay,
            label=f"GET {path}",
        )

    async def list(
        self, model: str, params: ListParams | dict[str, Any] | None = None
    ) -> ListResult:
        """Fetch one page of `model` and normalize it to a ListResult."""
        config = self.registry.get_config(model)
        params = ListParams.coerce(params)
        path = config.endpoints.resolve("list")
        raw = await self._read(path, build_query_params(params))
        try:
            return normalize_list(raw, params, config.default_page_size)
        except ValueError as e:
            raise ResponseFormatError(
                str(e), status=200, body=raw, details={"model": model}
            ) from e

    async def get(self, model: str, item_id: Any) -> dict[str, Any]:
        """Fetch one item. Raises NotFoundError when the backend answers 404."""
        path = self.registry.get_config(model).endpoints.resolve("get", item_id)
        return normalize_item(await self._read(path))

    async def create(self, model: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Create one item. The server must echo it back with its id."""
        path = self.registry.get_config(model).endpoints.resolve("create")
        body = normalize_item(await self._send("POST", path, payload=payload))
        if not isinstance(body, dict) or body.get("id") is None:
            raise ResponseFormatError(
                "Create response did not include the new item",
                status=200,
                body=body,
                details={"model": model},
            )
        return body

    async def update(
        self, model: str, item_id: Any, payload: dict[str, Any]
    ) -> dict[str, Any]:
        """Update one item. Returns the server echo, or the payload with its id."""
        path = self.registry.get_config(model).endpoints.resolve("update", item_id)
        body = normalize_item(await self._send("PUT", path, payload=payload))
        if isinstance(body, dict) and body:
            return body if "id" in body else {**body, "id": item_id}
        return {**payload, "id": item_id}

    async def remove(self, model: str, item_id: Any) -> dict[str, Any]:
        """Delete one item. Returns the server echo, or {id, deleted: True}."""
        path = self.registry.get_config(model).endpoints.resolve("delete", item_id)
        body = normalize_item(await self._send("DELETE", path))
        if isinstance(body, dict) and body:
            return body
        return {"id": item_id, "deleted": True}

    async def custom_action(
        self,
        model: str,
        action: str,
        item_id: Any = None,
        payload: Any = None,
        method: HttpMethod = "GET",
    ) -> Any:
        """Invoke `{base}/{action}[/{id}]`. Never retried, whatever the method."""
        base = self.registry.get_config(model).endpoints.base
        path = f"{base}/{action}" if item_id is None else f"{base}/{action}/{item_id}"
        return normalize_item(await self._send(method.upper(), path, payload=payload))

    async def search(self, model: str, term: str) -> Any:
        return await self.custom_action(model, "search", term, method="GET")

    async def test_endpoint(self, model: str) -> EndpointProbe:
        """Probe the list endpoint with a one-item page. Never raises."""
        try:
            await self.list(model, ListParams(page=1, page_size=1))
        except AdminKitError as e:
            return EndpointProbe(
                success=False,
                message=f"Endpoint for '{model}' unavailable: {e.message}",
                error=e,
            )
        return EndpointProbe(success=True, message=f"Endpoint for '{model}' available")

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> GenericApiClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"GenericApiClient(base_url={str(self.http.base_url)!r})"
