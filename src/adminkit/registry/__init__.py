# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Model registry: per-resource configuration records and their lookup.

Core exports:
- ModelConfig/Endpoints/SortSpec/Invalidation: declarative resource config
- ModelRegistry: name-based lookup with convention fallback
- build_default_registry: registry preloaded with catalog resources
- to_bool/to_int_or_zero/to_optional_int/to_number: field transforms
"""

from __future__ import annotations

from typing import TYPE_CHECKING

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "Endpoints": ("adminkit.registry.config", "Endpoints"),
    "Invalidation": ("adminkit.registry.config", "Invalidation"),
    "ModelConfig": ("adminkit.registry.config", "ModelConfig"),
    "SortSpec": ("adminkit.registry.config", "SortSpec"),
    "pluralize": ("adminkit.registry.config", "pluralize"),
    "ModelRegistry": ("adminkit.registry.registry", "ModelRegistry"),
    "RequiredCheck": ("adminkit.registry.registry", "RequiredCheck"),
    "DEFAULT_MODELS": ("adminkit.registry.defaults", "DEFAULT_MODELS"),
    "build_default_registry": ("adminkit.registry.defaults", "build_default_registry"),
    "to_bool": ("adminkit.registry.transforms", "to_bool"),
    "to_int_or_zero": ("adminkit.registry.transforms", "to_int_or_zero"),
    "to_number": ("adminkit.registry.transforms", "to_number"),
    "to_optional_int": ("adminkit.registry.transforms", "to_optional_int"),
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

    raise AttributeError(f"module 'adminkit.registry' has no attribute {name!r}")


def __dir__() -> list[str]:
    """Return all available attributes for autocomplete."""
    return list(__all__)


if TYPE_CHECKING:
    from .config import Endpoints, Invalidation, ModelConfig, SortSpec, pluralize
    from .defaults import DEFAULT_MODELS, build_default_registry
    from .registry import ModelRegistry, RequiredCheck
    from .transforms import to_bool, to_int_or_zero, to_number, to_optional_int

__all__ = (
    "DEFAULT_MODELS",
    "Endpoints",
    "Invalidation",
    "ModelConfig",
    "ModelRegistry",
    "RequiredCheck",
    "SortSpec",
    "build_default_registry",
    "pluralize",
    "to_bool",
    "to_int_or_zero",
    "to_number",
    "to_optional_int",
)
