# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Model registry: name -> ModelConfig with convention-based fallback.

Instantiated once at startup and injected into the API client and the
container store, so tests and embedders can build isolated registries.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from adminkit.api.params import ListParams

from .config import ModelConfig

logger = logging.getLogger(__name__)

__all__ = (
    "ModelRegistry",
    "RequiredCheck",
    "check_required",
    "list_defaults",
    "transform_payload",
)


@dataclass(frozen=True)
class RequiredCheck:
    """Result of a required-field check.

    Attributes:
        is_valid: True when no required field is missing
        missing_fields: Missing field names, in declared order
        message: Human-readable summary
    """

    is_valid: bool
    missing_fields: list[str] = field(default_factory=list)
    message: str = ""


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and value.strip() == ""


def transform_payload(config: ModelConfig, data: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of `data` with the config's field transforms applied.

    A transform that raises leaves that field's original value in place;
    other fields are unaffected and this function never raises.
    """
    out = dict(data)
    for field_name, transform in config.transform_fields.items():
        if field_name not in data:
            continue
        try:
            out[field_name] = transform(data[field_name])
        except Exception as e:
            logger.warning(
                "Transform for field '%s' of model '%s' failed: %s",
                field_name,
                config.name,
                e,
            )
    return out


def list_defaults(config: ModelConfig) -> ListParams:
    """First page with the config's default page size and sort."""
    return ListParams(
        page=1,
        page_size=config.default_page_size,
        sort=config.default_sort.field,
        order=config.default_sort.order,
    )


def check_required(config: ModelConfig, data: Mapping[str, Any]) -> RequiredCheck:
    """Check required fields are present and non-blank. Pure."""
    missing = [f for f in config.required_fields if _is_blank(data.get(f))]
    if missing:
        return RequiredCheck(
            is_valid=False,
            missing_fields=missing,
            message=f"Missing required fields: {', '.join(missing)}",
        )
    return RequiredCheck(is_valid=True, missing_fields=[], message="Validation passed")


class ModelRegistry:
    """Resource configuration registry with O(1) name lookup.

    Unknown names never fail: `get_config` synthesizes a conventional config
    (pluralized endpoints, no transforms, no required fields). Only a blank
    name is rejected, with ConfigurationError.

    Example:
        >>> registry = ModelRegistry()
        >>> registry.register(ModelConfig(name="stores", endpoints=Endpoints.for_path("/stores")))
        >>> registry.get_config("stores").endpoints.list
        '/stores'
        >>> registry.get_config("client").endpoints.list
        '/clients'
    """

    def __init__(self, configs: Iterable[ModelConfig] = ()):
        self._configs: dict[str, ModelConfig] = {}
        for config in configs:
            self.register(config)

    def register(self, config: ModelConfig, update: bool = False) -> None:
        """Register config by name.

        Raises:
            ValueError: If name exists and update=False.
        """
        if config.name in self._configs and not update:
            raise ValueError(f"Model '{config.name}' already registered")
        self._configs[config.name] = config

    def unregister(self, name: str) -> ModelConfig:
        """Remove and return config by name. Raises KeyError if not found."""
        if name not in self._configs:
            raise KeyError(f"Model '{name}' not found")
        return self._configs.pop(name)

    def get_config(self, name: str) -> ModelConfig:
        """Registered config, or a fallback derived from the name.

        Any non-blank name resolves. A blank name raises ConfigurationError.
        """
        config = self._configs.get(name)
        if config is None:
            config = ModelConfig.fallback(name)
        return config

    def has(self, name: str) -> bool:
        return name in self._configs

    def list_names(self) -> list[str]:
        return list(self._configs.keys())

    def apply_transforms(self, name: str, data: Mapping[str, Any]) -> dict[str, Any]:
        """Apply `name`'s field transforms to a copy of `data`. Never raises."""
        return transform_payload(self.get_config(name), data)

    def validate_required(self, name: str, data: Mapping[str, Any]) -> RequiredCheck:
        return check_required(self.get_config(name), data)

    def default_list_params(self, name: str) -> ListParams:
        return list_defaults(self.get_config(name))

    def supports_operation(self, name: str, operation: str) -> bool:
        return self.get_config(name).supports(operation)

    def custom_actions(self, name: str) -> frozenset[str]:
        return self.get_config(name).custom_actions

    def __len__(self) -> int:
        return len(self._configs)

    def __contains__(self, name: str) -> bool:
        return name in self._configs

    def __repr__(self) -> str:
        return f"ModelRegistry(models={self.list_names()})"
