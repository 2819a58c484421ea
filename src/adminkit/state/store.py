# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""ContainerStore: explicit name -> ResourceContainer registry.

Built once at startup and handed to every hook that needs it, so all views
naming the same resource share one container without a module-level
singleton. Containers are created lazily on first lookup and live until the
store is discarded; `reset` returns one to its initial state.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .container import ResourceContainer, make_container

if TYPE_CHECKING:
    from adminkit.api.client import GenericApiClient
    from adminkit.registry.registry import ModelRegistry

logger = logging.getLogger(__name__)

__all__ = ("ContainerStore",)


class ContainerStore:
    """Per-process container registry with O(1) name lookup.

    Example:
        >>> store = ContainerStore(api_client, registry)
        >>> categories = store.get("categories")   # created on first use
        >>> store.get("categories") is categories
        True
    """

    def __init__(self, client: GenericApiClient, registry: ModelRegistry) -> None:
        self.client = client
        self.registry = registry
        self._containers: dict[str, ResourceContainer] = {}

    def get(self, name: str) -> ResourceContainer:
        """Container for `name`, creating it from the registry config if needed."""
        container = self._containers.get(name)
        if container is None:
            container = make_container(self.registry.get_config(name), self.client)
            self._containers[name] = container
            logger.debug("Created container for '%s'", name)
        return container

    def has(self, name: str) -> bool:
        """Check if a container was already created."""
        return name in self._containers

    def list_names(self) -> list[str]:
        return list(self._containers.keys())

    def reset(self, name: str) -> None:
        """Reset one container to its initial state. No-op if never created."""
        if name in self._containers:
            self._containers[name].reset_state()

    def reset_all(self) -> None:
        for container in self._containers.values():
            container.reset_state()

    def discard(self, name: str) -> ResourceContainer:
        """Remove and return a container. Raises KeyError if not found."""
        if name not in self._containers:
            raise KeyError(f"Container '{name}' not found")
        return self._containers.pop(name)

    def clear(self) -> None:
        self._containers.clear()

    def __len__(self) -> int:
        return len(self._containers)

    def __contains__(self, name: str) -> bool:
        return name in self._containers

    def __repr__(self) -> str:
        return f"ContainerStore(containers={self.list_names()})"
