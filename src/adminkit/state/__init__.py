# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""State containers: per-resource state machines and their store.

Core exports:
- ResourceContainer/make_container: config-driven state machine factory
- ContainerStore: name -> container registry injected into hooks
- ContainerState/OpStatus/OperationError/OperationOutcome: state records
"""

from __future__ import annotations

from typing import TYPE_CHECKING

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "ResourceContainer": ("adminkit.state.container", "ResourceContainer"),
    "make_container": ("adminkit.state.container", "make_container"),
    "same_id": ("adminkit.state.container", "same_id"),
    "ContainerStore": ("adminkit.state.store", "ContainerStore"),
    "CHANNELS": ("adminkit.state.status", "CHANNELS"),
    "ContainerState": ("adminkit.state.status", "ContainerState"),
    "OpStatus": ("adminkit.state.status", "OpStatus"),
    "OperationError": ("adminkit.state.status", "OperationError"),
    "OperationOutcome": ("adminkit.state.status", "OperationOutcome"),
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

    raise AttributeError(f"module 'adminkit.state' has no attribute {name!r}")


def __dir__() -> list[str]:
    """Return all available attributes for autocomplete."""
    return list(__all__)


if TYPE_CHECKING:
    from .container import ResourceContainer, make_container, same_id
    from .status import (
        CHANNELS,
        ContainerState,
        OperationError,
        OperationOutcome,
        OpStatus,
    )
    from .store import ContainerStore

__all__ = (
    "CHANNELS",
    "ContainerState",
    "ContainerStore",
    "OpStatus",
    "OperationError",
    "OperationOutcome",
    "ResourceContainer",
    "make_container",
    "same_id",
)
