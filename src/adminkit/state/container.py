# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""ResourceContainer - per-resource state machine driven by a ModelConfig.

Six async operations, each an independent idle -> loading -> succeeded|failed
channel with its own error slot:

    fetch_list      replaces items/total/paging wholesale, stamps last_fetch
    fetch_by_id     overwrites current_item only
    create          prepends the new item, total += 1
    update          merges the server echo into the matching item and current_item
    remove          drops the item, total -= 1 (floored at 0), clears current_item
    custom_action   stamps last_update only; callers re-fetch per invalidation policy

Operations never raise. Each resolves to an OperationOutcome whose unwrap()
re-raises the original error. Operations on one container do not lock each
other out: whichever response lands last decides the visible state.

Example:
    container = make_container(registry.get_config("categories"), api)
    outcome = await container.fetch_list({"page": 2})
    if not outcome.ok:
        print(container.state.list_error.message)
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from adminkit.api.params import ListParams
from adminkit.errors import ConfigurationError, ResponseFormatError, ValidationError
from adminkit.registry.config import ModelConfig, SortSpec
from adminkit.registry.registry import check_required, list_defaults, transform_payload

from .status import ContainerState, OpStatus, OperationError, OperationOutcome

if TYPE_CHECKING:
    from adminkit.api.client import GenericApiClient, HttpMethod
    from adminkit.api.normalize import ListResult

logger = logging.getLogger(__name__)

__all__ = ("Listener", "ResourceContainer", "make_container", "same_id")

Listener = Callable[["ResourceContainer"], None]


def same_id(a: Any, b: Any) -> bool:
    """Ids compare equal across int/str spellings ('7' == 7)."""
    if a is None or b is None:
        return False
    return a == b or str(a) == str(b)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ResourceContainer:
    """State container for one resource.

    Attributes:
        config: ModelConfig the container was built from
        client: API client used by the async operations
        state: Current ContainerState (read-only for consumers)
    """

    def __init__(self, config: ModelConfig, client: GenericApiClient) -> None:
        self.config = config
        self.client = client
        self.state = self._initial_state()
        self._listeners: list[Listener] = []

    @property
    def name(self) -> str:
        return self.config.name

    def _initial_state(self) -> ContainerState:
        return ContainerState(
            page=1,
            page_size=self.config.default_page_size,
            current_sort=self.config.default_sort,
        )

    # -------------------------------------------------------------------------
    # Subscription
    # -------------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener(container)` after every transition. Returns unsubscribe."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Listener failed for container '%s'", self.name)

    # -------------------------------------------------------------------------
    # Channel bookkeeping
    # -------------------------------------------------------------------------

    def _begin(self, channel: str) -> None:
        setattr(self.state, f"{channel}_status", OpStatus.LOADING)
        setattr(self.state, f"{channel}_error", None)
        if channel == "list":
            self.state.status = OpStatus.LOADING
        logger.debug("%s/%s pending", self.name, channel)
        self._notify()

    def _succeed(self, channel: str, data: Any) -> OperationOutcome:
        setattr(self.state, f"{channel}_status", OpStatus.SUCCEEDED)
        if channel == "list":
            self.state.status = OpStatus.SUCCEEDED
        logger.debug("%s/%s fulfilled", self.name, channel)
        self._notify()
        return OperationOutcome(status="succeeded", data=data)

    def _fail(self, channel: str, error: Exception, fallback: str) -> OperationOutcome:
        record = OperationError.from_exception(error, fallback)
        setattr(self.state, f"{channel}_status", OpStatus.FAILED)
        setattr(self.state, f"{channel}_error", record)
        if channel == "list":
            self.state.status = OpStatus.FAILED
            self.state.error = record
        logger.debug("%s/%s rejected: %s", self.name, channel, record.message)
        self._notify()
        return OperationOutcome(status="failed", error=record, exception=error)

    def _guard(self, operation: str) -> None:
        if not self.config.supports(operation):
            raise ConfigurationError(
                f"Model '{self.name}' does not support {operation}",
                details={"model": self.name, "operation": operation},
            )

    # -------------------------------------------------------------------------
    # Async operations
    # -------------------------------------------------------------------------

    async def fetch_list(
        self,
        params: ListParams | dict[str, Any] | None = None,
        *,
        base: ListParams | dict[str, Any] | None = None,
    ) -> OperationOutcome[ListResult]:
        """Fetch a page.

        Layers, lowest first: the config's default paging and sort, `base`,
        then `params`. Invalid layers fail the list channel like any request.
        """
        self._begin("list")
        try:
            merged = list_defaults(self.config).merge(base).merge(params)
            result = await self.client.list(self.name, merged)
        except Exception as e:
            return self._fail("list", e, f"Error loading {self.config.label}")

        self.state.items = list(result.items)
        self.state.total = result.total
        self.state.page = result.page
        self.state.page_size = result.page_size
        self.state.total_pages = result.total_pages
        self.state.last_fetch = _now()
        return self._succeed("list", result)

    async def fetch_by_id(self, item_id: Any) -> OperationOutcome[dict[str, Any]]:
        self._begin("fetch_by_id")
        try:
            item = await self.client.get(self.name, item_id)
        except Exception as e:
            return self._fail("fetch_by_id", e, f"Error loading {self.config.label} item")

        self.state.current_item = item
        return self._succeed("fetch_by_id", item)

    async def create(self, payload: dict[str, Any]) -> OperationOutcome[dict[str, Any]]:
        """Validate, transform and create. The new item is shown first locally.

        Prepending is an approximation of server order that the next
        fetch_list corrects.
        """
        self._begin("create")
        try:
            self._guard("create")
            check = check_required(self.config, payload)
            if not check.is_valid:
                raise ValidationError(
                    check.message,
                    validation_errors={f: [f"{f} is required"] for f in check.missing_fields},
                    details={"model": self.name},
                )
            item = await self.client.create(self.name, transform_payload(self.config, payload))
            if not isinstance(item, dict):
                raise ResponseFormatError(
                    "Create response did not include the new item",
                    status=200,
                    body=item,
                    details={"model": self.name},
                )
        except Exception as e:
            return self._fail("create", e, f"Error creating {self.config.label}")

        self.state.items = [item, *self.state.items]
        self.state.total += 1
        self.state.last_update = _now()
        return self._succeed("create", item)

    async def update(
        self, item_id: Any, payload: dict[str, Any]
    ) -> OperationOutcome[dict[str, Any]]:
        self._begin("update")
        try:
            self._guard("update")
            item = await self.client.update(
                self.name, item_id, transform_payload(self.config, payload)
            )
        except Exception as e:
            return self._fail("update", e, f"Error updating {self.config.label}")

        if not isinstance(item, dict):
            item = {"id": item_id}
        key = item.get("id", item_id)
        self.state.items = [
            {**existing, **item} if same_id(existing.get("id"), key) else existing
            for existing in self.state.items
        ]
        current = self.state.current_item
        if current is not None and same_id(current.get("id"), key):
            self.state.current_item = {**current, **item}
        self.state.last_update = _now()
        return self._succeed("update", item)

    async def remove(self, item_id: Any) -> OperationOutcome[dict[str, Any]]:
        self._begin("delete")
        try:
            self._guard("delete")
            result = await self.client.remove(self.name, item_id)
        except Exception as e:
            return self._fail("delete", e, f"Error deleting {self.config.label}")

        result = {**result, "id": item_id}
        self.state.items = [
            existing
            for existing in self.state.items
            if not same_id(existing.get("id"), item_id)
        ]
        self.state.total = max(0, self.state.total - 1)
        current = self.state.current_item
        if current is not None and same_id(current.get("id"), item_id):
            self.state.current_item = None
        self.state.last_update = _now()
        return self._succeed("delete", result)

    async def custom_action(
        self,
        action: str,
        item_id: Any = None,
        payload: Any = None,
        method: HttpMethod = "GET",
    ) -> OperationOutcome[Any]:
        """Run a declared custom action. Leaves items and current_item untouched."""
        self._begin("custom_action")
        try:
            if action not in self.config.custom_actions:
                raise ConfigurationError(
                    f"Model '{self.name}' does not declare action '{action}'",
                    details={
                        "model": self.name,
                        "action": action,
                        "available": sorted(self.config.custom_actions),
                    },
                )
            result = await self.client.custom_action(
                self.name, action, item_id, payload, method
            )
        except Exception as e:
            return self._fail("custom_action", e, f"Error running action {action}")

        self.state.last_update = _now()
        return self._succeed("custom_action", result)

    # -------------------------------------------------------------------------
    # Synchronous transitions
    # -------------------------------------------------------------------------

    def clear_errors(self) -> None:
        self.state.error = None
        self.state.list_error = None
        self.state.fetch_by_id_error = None
        self.state.create_error = None
        self.state.update_error = None
        self.state.delete_error = None
        self.state.custom_action_error = None
        self._notify()

    def clear_current_item(self) -> None:
        self.state.current_item = None
        self.state.fetch_by_id_status = OpStatus.IDLE
        self.state.fetch_by_id_error = None
        self._notify()

    def set_filters(self, filters: dict[str, Any]) -> None:
        self.state.current_filters = dict(filters)
        self._notify()

    def set_sort(self, sort: SortSpec | dict[str, Any]) -> None:
        self.state.current_sort = (
            sort if isinstance(sort, SortSpec) else SortSpec.model_validate(sort)
        )
        self._notify()

    def apply_optimistic(self, item_id: Any, changes: dict[str, Any]) -> None:
        """Merge `changes` into the matching item and current_item ahead of the server."""
        self.state.items = [
            {**existing, **changes} if same_id(existing.get("id"), item_id) else existing
            for existing in self.state.items
        ]
        current = self.state.current_item
        if current is not None and same_id(current.get("id"), item_id):
            self.state.current_item = {**current, **changes}
        self._notify()

    def restore_item(
        self,
        item_id: Any,
        item: dict[str, Any] | None,
        current_item: dict[str, Any] | None = None,
    ) -> None:
        """Put back snapshots taken before an optimistic change."""
        if item is not None:
            self.state.items = [
                copy.deepcopy(item) if same_id(existing.get("id"), item_id) else existing
                for existing in self.state.items
            ]
        current = self.state.current_item
        if current_item is not None and current is not None and same_id(
            current.get("id"), item_id
        ):
            self.state.current_item = copy.deepcopy(current_item)
        self._notify()

    def reset_state(self) -> None:
        """Return to the initial empty state (used when a view tears down)."""
        self.state = self._initial_state()
        self._notify()

    # -------------------------------------------------------------------------
    # Selectors
    # -------------------------------------------------------------------------

    def find_item_by_id(self, item_id: Any) -> dict[str, Any] | None:
        for item in self.state.items:
            if same_id(item.get("id"), item_id):
                return item
        return None

    @property
    def pagination(self) -> dict[str, int]:
        return {
            "page": self.state.page,
            "page_size": self.state.page_size,
            "total": self.state.total,
            "total_pages": self.state.total_pages,
        }

    def __repr__(self) -> str:
        return (
            f"ResourceContainer(name={self.name!r}, items={len(self.state.items)}, "
            f"total={self.state.total})"
        )


def make_container(config: ModelConfig, client: GenericApiClient) -> ResourceContainer:
    """Build an independent container for `config`."""
    return ResourceContainer(config, client)
