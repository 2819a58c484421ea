# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""View-facing hooks over shared resource containers.

Core exports:
- ResourceHook: uniform data/loading/errors/actions surface for any resource
- DataView/LoadingView/ErrorsView/...: the read-only records it returns
"""

from __future__ import annotations

from typing import TYPE_CHECKING

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "ResourceHook": ("adminkit.hooks.resource", "ResourceHook"),
    "ActionsView": ("adminkit.hooks.views", "ActionsView"),
    "DataView": ("adminkit.hooks.views", "DataView"),
    "ErrorsView": ("adminkit.hooks.views", "ErrorsView"),
    "FiltersView": ("adminkit.hooks.views", "FiltersView"),
    "LoadingView": ("adminkit.hooks.views", "LoadingView"),
    "MetaView": ("adminkit.hooks.views", "MetaView"),
    "UtilsView": ("adminkit.hooks.views", "UtilsView"),
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

    raise AttributeError(f"module 'adminkit.hooks' has no attribute {name!r}")


def __dir__() -> list[str]:
    """Return all available attributes for autocomplete."""
    return list(__all__)


if TYPE_CHECKING:
    from .resource import ResourceHook
    from .views import (
        ActionsView,
        DataView,
        ErrorsView,
        FiltersView,
        LoadingView,
        MetaView,
        UtilsView,
    )

__all__ = (
    "ActionsView",
    "DataView",
    "ErrorsView",
    "FiltersView",
    "LoadingView",
    "MetaView",
    "ResourceHook",
    "UtilsView",
)
