# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""ModelConfig: declarative per-resource configuration record.

A ModelConfig is the only thing a new resource needs. It carries endpoint
templates (`:id` placeholder), field transforms, required fields, default
paging/sort, the custom actions the resource supports, and the cache
invalidation each custom action requires.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from adminkit.errors import ConfigurationError

__all__ = (
    "CRUD_OPERATIONS",
    "Endpoints",
    "Invalidation",
    "ModelConfig",
    "SortSpec",
    "pluralize",
)

FieldTransform = Callable[[Any], Any]

CRUD_OPERATIONS = ("list", "get", "create", "update", "delete")

ID_PLACEHOLDER = ":id"

DEFAULT_SORT_FIELD = "created_at"
DEFAULT_PAGE_SIZE = 20

_ES_SUFFIX = re.compile(r"(x|z|ch|sh)$")
_CONSONANT_Y = re.compile(r"[^aeiou]y$")


def pluralize(name: str) -> str:
    """Naive English plural used to derive endpoints for unregistered names.

    Names that already end in 's' are assumed to be plural.
    """
    if not name or name.endswith("s"):
        return name
    if _CONSONANT_Y.search(name):
        return name[:-1] + "ies"
    if _ES_SUFFIX.search(name):
        return name + "es"
    return name + "s"


class Invalidation(str, Enum):
    """Local cache invalidation required after a custom action succeeds."""

    NONE = "none"
    ITEM = "item"
    LIST = "list"
    ALL = "all"

    @property
    def refetch_item(self) -> bool:
        return self in (Invalidation.ITEM, Invalidation.ALL)

    @property
    def refetch_list(self) -> bool:
        return self in (Invalidation.LIST, Invalidation.ALL)


class SortSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: str = DEFAULT_SORT_FIELD
    order: Literal["asc", "desc"] = "desc"


class Endpoints(BaseModel):
    """Endpoint templates per CRUD operation. None means unsupported."""

    model_config = ConfigDict(frozen=True)

    list: str | None = None
    get: str | None = None
    create: str | None = None
    update: str | None = None
    delete: str | None = None

    @classmethod
    def for_path(cls, base: str) -> Endpoints:
        """Conventional REST endpoints rooted at `base` (e.g. '/categories')."""
        item = f"{base}/{ID_PLACEHOLDER}"
        return cls(list=base, get=item, create=base, update=item, delete=item)

    def supports(self, operation: str) -> bool:
        if operation not in CRUD_OPERATIONS:
            raise ValueError(
                f"Unknown operation '{operation}'. Available: {list(CRUD_OPERATIONS)}"
            )
        return getattr(self, operation) is not None

    def resolve(self, operation: str, item_id: Any = None) -> str:
        """Render the template for `operation`, substituting `item_id`.

        Raises:
            ConfigurationError: If the operation's endpoint is None.
        """
        if not self.supports(operation):
            raise ConfigurationError(
                f"Operation '{operation}' is not supported by this resource",
                details={"operation": operation},
            )
        template: str = getattr(self, operation)
        if ID_PLACEHOLDER in template:
            if item_id is None:
                raise ConfigurationError(
                    f"Endpoint for '{operation}' requires an id",
                    details={"operation": operation, "template": template},
                )
            template = template.replace(ID_PLACEHOLDER, str(item_id))
        return template

    @property
    def base(self) -> str:
        """Collection path used to root custom actions."""
        if self.list is not None:
            return self.list
        for template in (self.create, self.get, self.update, self.delete):
            if template is not None:
                return template.split(f"/{ID_PLACEHOLDER}")[0]
        raise ConfigurationError("Resource declares no endpoints")


class ModelConfig(BaseModel):
    """Per-resource configuration consumed by client, container and hook.

    Attributes:
        name: Registry key and default path segment.
        display_name: Human-readable label used in error messages.
        endpoints: Endpoint templates; a None entry disables that operation.
        transform_fields: field -> pure fn(value) -> value, applied before writes.
        required_fields: Fields that must be present and non-empty on create.
        default_sort: Sort applied when a list call does not specify one.
        default_page_size: Page size applied when a list call does not specify one.
        custom_actions: Non-CRUD verbs the resource accepts.
        invalidation: action -> cache invalidation after the action succeeds.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    display_name: str = ""
    endpoints: Endpoints
    transform_fields: dict[str, FieldTransform] = Field(default_factory=dict)
    required_fields: tuple[str, ...] = ()
    default_sort: SortSpec = Field(default_factory=SortSpec)
    default_page_size: int = Field(default=DEFAULT_PAGE_SIZE, gt=0)
    custom_actions: frozenset[str] = frozenset()
    invalidation: dict[str, Invalidation] = Field(default_factory=dict)

    @classmethod
    def fallback(cls, name: str) -> ModelConfig:
        """Convention-based config for a name with no registry entry.

        Raises:
            ConfigurationError: If name is blank.
        """
        if not name or not name.strip():
            raise ConfigurationError(
                "Model name must be a non-empty string", details={"model": name}
            )
        return cls(
            name=name,
            display_name=name[:1].upper() + name[1:],
            endpoints=Endpoints.for_path(f"/{pluralize(name)}"),
        )

    @property
    def label(self) -> str:
        return self.display_name or self.name

    def supports(self, operation: str) -> bool:
        return self.endpoints.supports(operation)

    def invalidation_for(self, action: str) -> Invalidation:
        return self.invalidation.get(action, Invalidation.NONE)

    def __repr__(self) -> str:
        ops = [op for op in CRUD_OPERATIONS if self.supports(op)]
        return f"ModelConfig(name={self.name!r}, ops={ops})"
