# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Generic API client: request building, retries and response normalization.

Core exports:
- GenericApiClient: registry-driven CRUD + custom actions
- ListParams/ListResult: list query input and canonical list output
- normalize_list/normalize_item: pure response-shape parsers
- build_http_client: httpx.AsyncClient factory with auth headers

Uses lazy loading for fast import.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "EndpointProbe": ("adminkit.api.client", "EndpointProbe"),
    "GenericApiClient": ("adminkit.api.client", "GenericApiClient"),
    "ListResult": ("adminkit.api.normalize", "ListResult"),
    "LIST_SHAPES": ("adminkit.api.normalize", "LIST_SHAPES"),
    "normalize_item": ("adminkit.api.normalize", "normalize_item"),
    "normalize_list": ("adminkit.api.normalize", "normalize_list"),
    "ListParams": ("adminkit.api.params", "ListParams"),
    "build_query_params": ("adminkit.api.params", "build_query_params"),
    "is_retryable": ("adminkit.api.retry", "is_retryable"),
    "retry_read": ("adminkit.api.retry", "retry_read"),
    "build_http_client": ("adminkit.api.transport", "build_http_client"),
}

_LOADED: dict[str, object] = {}


def __getattr__(name: str) -> object:
    """Lazy import attributes on first access."""
    if name in _LOADED:
        return _LOADED[name]

    if name in _LAZY_IMPORTS:
        from importlib import import_module

        module_name, attr_name = _LAZY_IMPORTS[name]
        module = import_module(module_name)
        value = getattr(module, attr_name)
        _LOADED[name] = value
        return value

    raise AttributeError(f"module 'adminkit.api' has no attribute {name!r}")


def __dir__() -> list[str]:
    """Return all available attributes for autocomplete."""
    return list(__all__)


if TYPE_CHECKING:
    from .client import EndpointProbe, GenericApiClient
    from .normalize import LIST_SHAPES, ListResult, normalize_item, normalize_list
    from .params import ListParams, build_query_params
    from .retry import is_retryable, retry_read
    from .transport import build_http_client

__all__ = (
    "LIST_SHAPES",
    "EndpointProbe",
    "GenericApiClient",
    "ListParams",
    "ListResult",
    "build_http_client",
    "build_query_params",
    "is_retryable",
    "normalize_item",
    "normalize_list",
    "retry_read",
)
