# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""adminkit - Generic resource management for admin consoles.

Top-level re-exports for convenient imports:
- adminkit.registry -> ModelConfig, ModelRegistry
- adminkit.api -> GenericApiClient, ListResult
- adminkit.state -> ResourceContainer, ContainerStore
- adminkit.hooks -> ResourceHook

Adding a resource only requires a new ModelConfig in the registry; the
client, containers and hooks are driven entirely by that record.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "ModelConfig": ("adminkit.registry.config", "ModelConfig"),
    "ModelRegistry": ("adminkit.registry.registry", "ModelRegistry"),
    "build_default_registry": ("adminkit.registry.defaults", "build_default_registry"),
    "GenericApiClient": ("adminkit.api.client", "GenericApiClient"),
    "ListParams": ("adminkit.api.params", "ListParams"),
    "ListResult": ("adminkit.api.normalize", "ListResult"),
    "ContainerStore": ("adminkit.state.store", "ContainerStore"),
    "ResourceContainer": ("adminkit.state.container", "ResourceContainer"),
    "make_container": ("adminkit.state.container", "make_container"),
    "ResourceHook": ("adminkit.hooks.resource", "ResourceHook"),
    "AdminKitSettings": ("adminkit.config", "AdminKitSettings"),
    "get_settings": ("adminkit.config", "get_settings"),
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

    raise AttributeError(f"module 'adminkit' has no attribute {name!r}")


def __dir__() -> list[str]:
    """Return all available attributes for autocomplete."""
    return list(__all__)


if TYPE_CHECKING:
    from .api.client import GenericApiClient
    from .api.normalize import ListResult
    from .api.params import ListParams
    from .config import AdminKitSettings, get_settings
    from .hooks.resource import ResourceHook
    from .registry.config import ModelConfig
    from .registry.defaults import build_default_registry
    from .registry.registry import ModelRegistry
    from .state.container import ResourceContainer, make_container
    from .state.store import ContainerStore

__all__ = (
    "AdminKitSettings",
    "ContainerStore",
    "GenericApiClient",
    "ListParams",
    "ListResult",
    "ModelConfig",
    "ModelRegistry",
    "ResourceContainer",
    "ResourceHook",
    "build_default_registry",
    "get_settings",
    "make_container",
)
