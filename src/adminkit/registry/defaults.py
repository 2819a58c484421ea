# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Built-in catalog resources: categories, attributes, options."""

from __future__ import annotations

from .config import Endpoints, Invalidation, ModelConfig, SortSpec
from .registry import ModelRegistry
from .transforms import to_bool, to_int_or_zero, to_optional_int

__all__ = ("DEFAULT_MODELS", "build_default_registry")

_STATE_ACTIONS = {
    "activate": Invalidation.ALL,
    "deactivate": Invalidation.ALL,
    "duplicate": Invalidation.LIST,
}
_ORDER_ACTIONS = {
    "moveUp": Invalidation.LIST,
    "moveDown": Invalidation.LIST,
}

CATEGORIES = ModelConfig(
    name="categories",
    display_name="Categories",
    endpoints=Endpoints.for_path("/categories"),
    transform_fields={
        "active": to_bool,
        "visible": to_bool,
        "position": to_int_or_zero,
        "parent": to_optional_int,
    },
    required_fields=("name",),
    default_sort=SortSpec(field="position", order="asc"),
    default_page_size=50,
    custom_actions=frozenset({*_STATE_ACTIONS, *_ORDER_ACTIONS}),
    invalidation={**_STATE_ACTIONS, **_ORDER_ACTIONS},
)

ATTRIBUTES = ModelConfig(
    name="attributes",
    display_name="Attributes",
    endpoints=Endpoints.for_path("/attributes"),
    transform_fields={
        "active": to_bool,
        "visible": to_bool,
        "level": to_int_or_zero,
        "parent": to_optional_int,
        "id_category": to_optional_int,
    },
    required_fields=("name", "utilities"),
    default_sort=SortSpec(field="name", order="asc"),
    default_page_size=30,
    custom_actions=frozenset(_STATE_ACTIONS),
    invalidation=dict(_STATE_ACTIONS),
)

OPTIONS = ModelConfig(
    name="options",
    display_name="Options",
    endpoints=Endpoints.for_path("/options"),
    transform_fields={
        "active": to_bool,
        "position": to_int_or_zero,
        "id_category": to_optional_int,
    },
    required_fields=("name", "utilities"),
    default_sort=SortSpec(field="position", order="asc"),
    default_page_size=25,
    custom_actions=frozenset({*_STATE_ACTIONS, *_ORDER_ACTIONS}),
    invalidation={**_STATE_ACTIONS, **_ORDER_ACTIONS},
)

DEFAULT_MODELS: tuple[ModelConfig, ...] = (CATEGORIES, ATTRIBUTES, OPTIONS)


def build_default_registry() -> ModelRegistry:
    """Fresh registry pre-loaded with the catalog resources."""
    return ModelRegistry(DEFAULT_MODELS)
