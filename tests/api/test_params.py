# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for adminkit.api.params - ListParams layering and query flattening."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from adminkit.api.params import ListParams, build_query_params


class TestListParams:
    def test_coerce(self):
        assert ListParams.coerce(None) == ListParams()
        params = ListParams(page=2)
        assert ListParams.coerce(params) is params
        assert ListParams.coerce({"page": 3}).page == 3

    def test_merge_later_wins_and_none_does_not_override(self):
        base = ListParams(page=1, page_size=50, sort="position", order="asc")
        merged = base.merge({"page": 3, "order": None})
        assert merged.page == 3
        assert merged.page_size == 50
        assert merged.order == "asc"

    def test_merge_filters_key_wise(self):
        base = ListParams(filters={"active": 1, "parent": 4})
        merged = base.merge(ListParams(filters={"parent": 9, "visible": 0}))
        assert merged.filters == {"active": 1, "parent": 9, "visible": 0}

    def test_invalid_page_rejected(self):
        with pytest.raises(ValidationError):
            ListParams(page=0)

    def test_invalid_order_rejected(self):
        with pytest.raises(ValidationError):
            ListParams(order="sideways")


class TestBuildQueryParams:
    def test_flattens_fields_and_filters(self):
        params = ListParams(
            page=2,
            page_size=10,
            sort="name",
            order="asc",
            query="bed",
            filters={"active": 1},
        )
        assert build_query_params(params) == {
            "page": 2,
            "per_page": 10,
            "sort": "name",
            "order": "asc",
            "search": "bed",
            "active": 1,
        }

    def test_drops_none_and_empty_values(self):
        params = ListParams(page=1, query="", filters={"parent": None, "q": ""})
        assert build_query_params(params) == {"page": 1}

    def test_filter_does_not_override_paging(self):
        params = ListParams(page=2, filters={"page": 9, "sort": "id"})
        assert build_query_params(params) == {"page": 2, "sort": "id"}

    def test_zero_filter_is_kept(self):
        assert build_query_params(ListParams(filters={"active": 0})) == {"active": 0}
