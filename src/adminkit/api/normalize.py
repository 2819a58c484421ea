# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Response normalization: many backend shapes -> one ListResult.

List responses are matched against an ordered sequence of pure shape
parsers; the first parser that recognizes the payload wins:

    1. enveloped   {"data": {"items": [...], "pagination": {...}}}
    2. flat        {"data": [...], "total", "current_page", "per_page", "last_page"}
    3. bare        [...]
    4. keyed       {"items" | "results": [...], "total" | "count", ...}
    5. single      {...}  -> one-item list, total = 1

Parsers hold no state, so identical input always yields identical output.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .params import ListParams

__all__ = (
    "LIST_SHAPES",
    "ListResult",
    "normalize_item",
    "normalize_list",
)

Item = dict[str, Any]


class ListResult(BaseModel):
    """Canonical list payload. `items` keeps server order."""

    model_config = ConfigDict(frozen=True)

    items: list[Item] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 1
    total_pages: int = 0

    def __len__(self) -> int:
        return len(self.items)


ShapeParser = Callable[[Any, ListParams, int], "ListResult | None"]


def _positive_int(value: Any) -> int | None:
    """Positive integer from int/float/numeric string; anything else is None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = int(value)
    elif isinstance(value, str) and value.strip().isdigit():
        number = int(value.strip())
    else:
        return None
    return number if number > 0 else None


def _first(mapping: Mapping[str, Any], *keys: str) -> int | None:
    for key in keys:
        value = _positive_int(mapping.get(key))
        if value is not None:
            return value
    return None


def _build(
    items: list[Item],
    *,
    total: int | None,
    page: int | None,
    page_size: int | None,
    total_pages: int | None,
    params: ListParams,
    default_page_size: int,
) -> ListResult:
    total = max(total or 0, len(items))
    page = page or params.page or 1
    page_size = max(page_size or params.page_size or default_page_size, len(items), 1)
    if total_pages is None:
        total_pages = math.ceil(total / page_size)
    return ListResult(
        items=list(items),
        total=total,
        page=page,
        page_size=page_size,
        total_pages=total_pages,
    )


def _enveloped(raw: Any, params: ListParams, default_page_size: int) -> ListResult | None:
    if not isinstance(raw, Mapping):
        return None
    data = raw.get("data")
    if not isinstance(data, Mapping) or not isinstance(data.get("items"), list):
        return None
    pagination = data.get("pagination")
    if not isinstance(pagination, Mapping):
        pagination = {}
    return _build(
        data["items"],
        total=_first(pagination, "total"),
        page=_first(pagination, "current_page"),
        page_size=_first(pagination, "per_page"),
        total_pages=_first(pagination, "last_page"),
        params=params,
        default_page_size=default_page_size,
    )


def _flat(raw: Any, params: ListParams, default_page_size: int) -> ListResult | None:
    if not isinstance(raw, Mapping) or not isinstance(raw.get("data"), list):
        return None
    return _build(
        raw["data"],
        total=_first(raw, "total"),
        page=_first(raw, "current_page"),
        page_size=_first(raw, "per_page"),
        total_pages=_first(raw, "last_page"),
        params=params,
        default_page_size=default_page_size,
    )


def _bare(raw: Any, params: ListParams, default_page_size: int) -> ListResult | None:
    if not isinstance(raw, list):
        return None
    return _build(
        raw,
        total=len(raw),
        page=None,
        page_size=params.page_size or len(raw) or None,
        total_pages=None,
        params=params,
        default_page_size=default_page_size,
    )


def _keyed(raw: Any, params: ListParams, default_page_size: int) -> ListResult | None:
    if not isinstance(raw, Mapping):
        return None
    for key in ("items", "results"):
        if isinstance(raw.get(key), list):
            return _build(
                raw[key],
                total=_first(raw, "total", "count"),
                page=_first(raw, "page", "current_page"),
                page_size=_first(raw, "pageSize", "page_size", "per_page"),
                total_pages=_first(raw, "totalPages", "total_pages", "last_page"),
                params=params,
                default_page_size=default_page_size,
            )
    return None


def _single(raw: Any, params: ListParams, default_page_size: int) -> ListResult | None:
    if not isinstance(raw, Mapping):
        return None
    return ListResult(
        items=[dict(raw)],
        total=1,
        page=1,
        page_size=max(params.page_size or default_page_size, 1),
        total_pages=1,
    )


LIST_SHAPES: tuple[tuple[str, ShapeParser], ...] = (
    ("enveloped", _enveloped),
    ("flat", _flat),
    ("bare", _bare),
    ("keyed", _keyed),
    ("single", _single),
)


def normalize_list(
    raw: Any,
    params: ListParams | None = None,
    default_page_size: int = 20,
) -> ListResult:
    """Normalize a decoded list response.

    Args:
        raw: Decoded JSON body.
        params: Params the request was issued with (paging fallbacks).
        default_page_size: Used when neither server nor params give a page size.

    Raises:
        ValueError: If the body is a scalar no shape recognizes.
    """
    params = params or ListParams()
    if raw is None:
        return ListResult(page=params.page or 1, page_size=params.page_size or default_page_size)
    for _name, parser in LIST_SHAPES:
        result = parser(raw, params, default_page_size)
        if result is not None:
            return result
    raise ValueError(f"Unrecognized list response of type {type(raw).__name__}")


def normalize_item(raw: Any) -> Any:
    """Unwrap a `{"data": {...}}` envelope around a single-item response."""
    if isinstance(raw, Mapping) and raw.get("data"):
        return raw["data"]
    return raw
