# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""ResourceHook - UI-facing surface over one shared ResourceContainer.

The hook re-exposes a container as `data / loading / errors / filters /
actions / utils / meta` views (recomputed on every access) and adds:

- Auto-fetch on mount: the first mount of a container that is empty, not
  loading and never fetched triggers one fetch_list; later mounts do not.
- Optimistic update (opt-in): the change is merged locally before the call
  and rolled back to the snapshot taken at call time if the call fails.
- Error propagation: actions re-raise the operation's error after it has
  been written to the container, so awaiting callers can branch while
  non-awaiting observers still see it in shared state.
- Custom-action invalidation: after a successful action the item and/or
  list is re-fetched as the resource's ModelConfig declares.

Example:
    store = ContainerStore(api, registry)
    hook = ResourceHook(store, "categories", fetch_params={"page_size": 10})
    await hook.mount()
    created = await hook.actions.create({"name": "Colchones"})
    for item in hook.data.items:
        ...
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from adminkit.api.params import ListParams
from adminkit.registry.config import ModelConfig, SortSpec
from adminkit.registry.registry import transform_payload
from adminkit.state.container import ResourceContainer, same_id
from adminkit.state.status import OpStatus, OperationOutcome

from .views import (
    ActionsView,
    DataView,
    ErrorsView,
    FiltersView,
    LoadingView,
    MetaView,
    UtilsView,
)

if TYPE_CHECKING:
    from adminkit.api.client import HttpMethod
    from adminkit.api.normalize import ListResult
    from adminkit.state.store import ContainerStore

logger = logging.getLogger(__name__)

__all__ = ("ResourceHook",)

SuccessCallback = Callable[[str, Any], None]
ErrorCallback = Callable[[str, BaseException], None]


class ResourceHook:
    """Binds a view to the shared container of one resource.

    Attributes:
        store: ContainerStore the container is drawn from
        model_name: Resource name
        auto_fetch: Fetch on first mount when the container was never loaded
        fetch_params: ListParams layered under every fetch_list call
        optimistic_updates: Default for update(optimistic=...)
        on_success: Called with (operation, result) after a successful action
        on_error: Called with (operation, error) before the error is re-raised
    """

    def __init__(
        self,
        store: ContainerStore,
        model_name: str,
        *,
        auto_fetch: bool = True,
        fetch_params: ListParams | dict[str, Any] | None = None,
        optimistic_updates: bool = False,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self.store = store
        self.model_name = model_name
        self.auto_fetch = auto_fetch
        self.fetch_params = ListParams.coerce(fetch_params)
        self.optimistic_updates = optimistic_updates
        self.on_success = on_success
        self.on_error = on_error
        self.mounted = False

    @property
    def container(self) -> ResourceContainer:
        return self.store.get(self.model_name)

    @property
    def config(self) -> ModelConfig:
        return self.container.config

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def mount(self) -> ListResult | None:
        """Mount the view; auto-fetch if this container has never been loaded.

        Returns the fetched ListResult, or None when no fetch was issued or
        the fetch failed (the failure is in `errors.list_error`).
        """
        self.mounted = True
        state = self.container.state
        if (
            not self.auto_fetch
            or state.items
            or state.list_status is OpStatus.LOADING
            or state.last_fetch is not None
        ):
            return None

        logger.debug("Auto-fetching '%s'", self.model_name)
        outcome = await self.container.fetch_list(self.fetch_params)
        self._report("fetch_list", outcome)
        return outcome.data if outcome.ok else None

    def unmount(self, *, reset: bool = False) -> None:
        """Detach the view. In-flight requests keep running and still land in state."""
        self.mounted = False
        if reset:
            self.container.reset_state()

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def _report(self, operation: str, outcome: OperationOutcome) -> None:
        if outcome.ok:
            if self.on_success is not None:
                self.on_success(operation, outcome.data)
        elif self.on_error is not None and outcome.exception is not None:
            self.on_error(operation, outcome.exception)

    def _settle(self, operation: str, outcome: OperationOutcome) -> Any:
        self._report(operation, outcome)
        if not outcome.ok:
            logger.debug("%s on '%s' failed: %s", operation, self.model_name, outcome.error)
        return outcome.unwrap()

    async def fetch_list(
        self, params: ListParams | dict[str, Any] | None = None
    ) -> ListResult:
        outcome = await self.container.fetch_list(params, base=self.fetch_params)
        return self._settle("fetch_list", outcome)

    async def fetch_by_id(self, item_id: Any) -> dict[str, Any]:
        outcome = await self.container.fetch_by_id(item_id)
        return self._settle("fetch_by_id", outcome)

    async def create(self, payload: dict[str, Any]) -> dict[str, Any]:
        outcome = await self.container.create(payload)
        return self._settle("create", outcome)

    async def update(
        self,
        item_id: Any,
        payload: dict[str, Any],
        *,
        optimistic: bool | None = None,
    ) -> dict[str, Any]:
        """Update an item, optionally showing the change before the server confirms.

        Rollback restores the snapshot captured here, not a fresh server read.
        """
        container = self.container
        optimistic = self.optimistic_updates if optimistic is None else optimistic
        optimistic = optimistic and self.can_update

        prior_item = prior_current = None
        if optimistic:
            found = container.find_item_by_id(item_id)
            prior_item = copy.deepcopy(found) if found is not None else None
            current = container.state.current_item
            if current is not None and same_id(current.get("id"), item_id):
                prior_current = copy.deepcopy(current)
            container.apply_optimistic(item_id, transform_payload(self.config, payload))

        outcome = await container.update(item_id, payload)
        if optimistic and not outcome.ok:
            logger.debug("Rolling back optimistic update of %s/%s", self.model_name, item_id)
            container.restore_item(item_id, prior_item, prior_current)
        return self._settle("update", outcome)

    async def remove(self, item_id: Any) -> dict[str, Any]:
        outcome = await self.container.remove(item_id)
        return self._settle("remove", outcome)

    async def custom_action(
        self,
        action: str,
        item_id: Any = None,
        payload: Any = None,
        method: HttpMethod = "GET",
    ) -> Any:
        """Run a custom action, then apply its declared invalidation policy."""
        container = self.container
        outcome = await container.custom_action(action, item_id, payload, method)
        if outcome.ok:
            policy = self.config.invalidation_for(action)
            current = container.state.current_item
            if (
                policy.refetch_item
                and current is not None
                and same_id(current.get("id"), item_id)
            ):
                await container.fetch_by_id(item_id)
            if policy.refetch_list:
                await container.fetch_list(self._refetch_params(), base=self.fetch_params)
        return self._settle("custom_action", outcome)

    def _refetch_params(self) -> ListParams:
        state = self.container.state
        return ListParams(
            sort=state.current_sort.field,
            order=state.current_sort.order,
            filters=state.current_filters,
        )

    async def refetch(self) -> ListResult:
        """Re-issue fetch_list with the stored filters and sort."""
        return await self.fetch_list(self._refetch_params())

    # -------------------------------------------------------------------------
    # Utilities
    # -------------------------------------------------------------------------

    def set_filters(self, filters: dict[str, Any]) -> None:
        self.container.set_filters(filters)

    def set_sort(self, sort: SortSpec | dict[str, Any]) -> None:
        self.container.set_sort(sort)

    def clear_errors(self) -> None:
        self.container.clear_errors()

    def clear_current_item(self) -> None:
        self.container.clear_current_item()

    def reset_state(self) -> None:
        self.container.reset_state()

    def find_item_by_id(self, item_id: Any) -> dict[str, Any] | None:
        return self.container.find_item_by_id(item_id)

    @property
    def can_create(self) -> bool:
        return self.config.supports("create")

    @property
    def can_update(self) -> bool:
        return self.config.supports("update")

    @property
    def can_delete(self) -> bool:
        return self.config.supports("delete")

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    @property
    def loading(self) -> LoadingView:
        state = self.container.state
        flags = {
            "is_loading": state.status is OpStatus.LOADING,
            "is_list_loading": state.list_status is OpStatus.LOADING,
            "is_create_loading": state.create_status is OpStatus.LOADING,
            "is_update_loading": state.update_status is OpStatus.LOADING,
            "is_delete_loading": state.delete_status is OpStatus.LOADING,
            "is_fetch_by_id_loading": state.fetch_by_id_status is OpStatus.LOADING,
            "is_custom_action_loading": state.custom_action_status is OpStatus.LOADING,
        }
        return LoadingView(**flags, is_any_loading=any(flags.values()))

    @property
    def errors(self) -> ErrorsView:
        state = self.container.state
        channels = {
            "error": state.error,
            "list_error": state.list_error,
            "create_error": state.create_error,
            "update_error": state.update_error,
            "delete_error": state.delete_error,
            "fetch_by_id_error": state.fetch_by_id_error,
            "custom_action_error": state.custom_action_error,
        }
        return ErrorsView(
            **channels,
            has_error=any(e is not None for e in channels.values()),
        )

    @property
    def data(self) -> DataView:
        container = self.container
        state = container.state
        return DataView(
            items=state.items,
            current_item=state.current_item,
            total=state.total,
            pagination=container.pagination,
            is_empty=(
                not state.items
                and state.list_status is not OpStatus.LOADING
                and not self.errors.has_error
            ),
            config=container.config,
        )

    @property
    def filters(self) -> FiltersView:
        state = self.container.state
        return FiltersView(
            current_filters=state.current_filters,
            current_sort=state.current_sort,
            set_filters=self.set_filters,
            set_sort=self.set_sort,
        )

    @property
    def actions(self) -> ActionsView:
        return ActionsView(
            fetch_list=self.fetch_list,
            fetch_by_id=self.fetch_by_id,
            create=self.create,
            update=self.update,
            remove=self.remove,
            custom_action=self.custom_action,
            refetch=self.refetch,
        )

    @property
    def utils(self) -> UtilsView:
        return UtilsView(
            clear_errors=self.clear_errors,
            clear_current_item=self.clear_current_item,
            reset_state=self.reset_state,
            find_item_by_id=self.find_item_by_id,
            can_create=self.can_create,
            can_update=self.can_update,
            can_delete=self.can_delete,
        )

    @property
    def meta(self) -> MetaView:
        state = self.container.state
        return MetaView(
            model_name=self.model_name,
            last_fetch=state.last_fetch,
            last_update=state.last_update,
            config=self.config,
        )

    def __repr__(self) -> str:
        return f"ResourceHook(model={self.model_name!r}, mounted={self.mounted})"
