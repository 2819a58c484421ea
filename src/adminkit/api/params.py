# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""List query parameters and their flattening into backend query strings."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

__all__ = ("ListParams", "build_query_params")


class ListParams(BaseModel):
    """Paging, sort, free-text query and filters for a list call.

    Every field is optional so layers can be merged: registry defaults, then
    hook-level fetch params, then per-call params. Later layers win; filters
    merge key by key.
    """

    model_config = ConfigDict(frozen=True)

    page: int | None = Field(default=None, ge=1)
    page_size: int | None = Field(default=None, ge=1)
    sort: str | None = None
    order: Literal["asc", "desc"] | None = None
    query: str | None = None
    filters: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def coerce(cls, params: ListParams | dict[str, Any] | None) -> ListParams:
        if params is None:
            return cls()
        if isinstance(params, ListParams):
            return params
        return cls.model_validate(params)

    def merge(self, other: ListParams | dict[str, Any] | None) -> ListParams:
        """Overlay `other` on self; None fields in `other` do not override."""
        other = ListParams.coerce(other)
        data = self.model_dump(exclude={"filters"}, exclude_none=True)
        data.update(other.model_dump(exclude={"filters"}, exclude_none=True))
        data["filters"] = {**self.filters, **other.filters}
        return ListParams(**data)


def build_query_params(params: ListParams) -> dict[str, Any]:
    """Flatten ListParams into the backend's query convention.

    page/per_page/sort/order/search at top level, each filter as its own key.
    None and empty-string values are dropped.
    """
    raw: dict[str, Any] = {
        "page": params.page,
        "per_page": params.page_size,
        "sort": params.sort,
        "order": params.order,
        "search": params.query,
    }
    for key, value in params.filters.items():
        if raw.get(key) is None:
            raw[key] = value
    return {k: v for k, v in raw.items() if v is not None and v != ""}
