# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Read-only view records exposed by ResourceHook.

Every consuming view programs against these shapes regardless of which
resource it names.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from adminkit.registry.config import ModelConfig, SortSpec
    from adminkit.state.status import OperationError

__all__ = (
    "ActionsView",
    "DataView",
    "ErrorsView",
    "FiltersView",
    "LoadingView",
    "MetaView",
    "UtilsView",
)

AsyncAction = Callable[..., Awaitable[Any]]


@dataclass(frozen=True)
class DataView:
    items: list[dict[str, Any]]
    current_item: dict[str, Any] | None
    total: int
    pagination: dict[str, int]
    is_empty: bool
    config: ModelConfig


@dataclass(frozen=True)
class LoadingView:
    is_loading: bool
    is_list_loading: bool
    is_create_loading: bool
    is_update_loading: bool
    is_delete_loading: bool
    is_fetch_by_id_loading: bool
    is_custom_action_loading: bool
    is_any_loading: bool


@dataclass(frozen=True)
class ErrorsView:
    error: OperationError | None
    list_error: OperationError | None
    create_error: OperationError | None
    update_error: OperationError | None
    delete_error: OperationError | None
    fetch_by_id_error: OperationError | None
    custom_action_error: OperationError | None
    has_error: bool


@dataclass(frozen=True)
class FiltersView:
    current_filters: dict[str, Any]
    current_sort: SortSpec
    set_filters: Callable[[dict[str, Any]], None]
    set_sort: Callable[..., None]


@dataclass(frozen=True)
class ActionsView:
    fetch_list: AsyncAction
    fetch_by_id: AsyncAction
    create: AsyncAction
    update: AsyncAction
    remove: AsyncAction
    custom_action: AsyncAction
    refetch: AsyncAction


@dataclass(frozen=True)
class UtilsView:
    clear_errors: Callable[[], None]
    clear_current_item: Callable[[], None]
    reset_state: Callable[[], None]
    find_item_by_id: Callable[[Any], dict[str, Any] | None]
    can_create: bool
    can_update: bool
    can_delete: bool


@dataclass(frozen=True)
class MetaView:
    model_name: str
    last_fetch: datetime | None
    last_update: datetime | None
    config: ModelConfig
