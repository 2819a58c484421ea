# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for adminkit.api.client - GenericApiClient over httpx.MockTransport."""

from __future__ import annotations

import json

import httpx
import pytest

from adminkit.api.client import GenericApiClient
from adminkit.api.params import ListParams
from adminkit.config import AdminKitSettings
from adminkit.errors import (
    ConfigurationError,
    HttpError,
    NetworkError,
    NotFoundError,
    ResponseFormatError,
    ValidationError,
)
from adminkit.registry import Endpoints, ModelConfig, ModelRegistry

# =============================================================================
# CRUD
# =============================================================================


class TestCrud:
    @pytest.mark.anyio
    async def test_list_paginates_and_normalizes(self, client, backend):
        backend.seed("categories", [{"id": i, "name": f"c{i}"} for i in range(1, 8)])
        result = await client.list("categories", ListParams(page=2, page_size=5, filters={}))
        assert [item["id"] for item in result.items] == [6, 7]
        assert result.total == 7
        assert result.page == 2
        assert result.total_pages == 2
        request = backend.calls("GET", "/categories")[0]
        assert request.url.params["per_page"] == "5"

    @pytest.mark.anyio
    async def test_list_query_params(self, client, backend):
        params = ListParams(page=1, sort="name", order="asc", query="bed", filters={"active": 1})
        await client.list("categories", params)
        query = dict(backend.requests[0].url.params)
        assert query == {
            "page": "1",
            "sort": "name",
            "order": "asc",
            "search": "bed",
            "active": "1",
        }

    @pytest.mark.anyio
    async def test_list_accepts_dict_params(self, client, backend):
        backend.seed("options", [{"id": 1, "active": 1}, {"id": 2, "active": 0}])
        result = await client.list("options", {"filters": {"active": 1}})
        assert [item["id"] for item in result.items] == [1]

    @pytest.mark.anyio
    async def test_get_unwraps_envelope(self, client, backend):
        backend.seed("categories", [{"id": 7, "name": "Beds"}])
        assert await client.get("categories", 7) == {"id": 7, "name": "Beds"}
        assert backend.requests[0].url.path == "/categories/7"

    @pytest.mark.anyio
    async def test_get_missing_raises_not_found(self, client, backend):
        with pytest.raises(NotFoundError) as exc_info:
            await client.get("categories", 404)
        assert exc_info.value.status == 404
        assert "not found" in exc_info.value.message

    @pytest.mark.anyio
    async def test_create_posts_json(self, client, backend):
        created = await client.create("categories", {"name": "Sofas"})
        assert created["name"] == "Sofas"
        request = backend.calls("POST", "/categories")[0]
        assert json.loads(request.content) == {"name": "Sofas"}

    @pytest.mark.anyio
    async def test_update_puts_json(self, client, backend):
        backend.seed("categories", [{"id": 3, "name": "Old"}])
        updated = await client.update("categories", 3, {"name": "New"})
        assert updated == {"id": 3, "name": "New"}
        assert backend.calls("PUT", "/categories/3")

    @pytest.mark.anyio
    async def test_update_empty_body_echoes_payload(self, make_client):
        client = make_client(lambda request: httpx.Response(204))
        assert await client.update("categories", 3, {"name": "New"}) == {"id": 3, "name": "New"}

    @pytest.mark.anyio
    async def test_create_empty_body_is_format_error(self, make_client):
        client = make_client(lambda request: httpx.Response(204))
        with pytest.raises(ResponseFormatError, match="new item"):
            await client.create("categories", {"name": "Sofas"})

    @pytest.mark.anyio
    async def test_remove_empty_body_falls_back(self, client, backend):
        backend.seed("categories", [{"id": 3}])
        assert await client.remove("categories", 3) == {"id": 3, "deleted": True}
        assert 3 not in backend.tables["categories"]

    @pytest.mark.anyio
    async def test_unregistered_model_uses_conventional_paths(self, client, backend):
        await client.list("client")
        assert backend.requests[0].url.path == "/clients"

    @pytest.mark.anyio
    async def test_unsupported_operation_never_hits_network(self, backend):
        registry = ModelRegistry([ModelConfig(name="logs", endpoints=Endpoints(list="/logs"))])
        http = httpx.AsyncClient(base_url="http://t", transport=httpx.MockTransport(backend))
        client = GenericApiClient(http, registry, retry_delay=0)
        with pytest.raises(ConfigurationError):
            await client.create("logs", {"line": "x"})
        assert backend.requests == []


# =============================================================================
# Errors and retries
# =============================================================================


class TestErrors:
    @pytest.mark.anyio
    async def test_validation_error_parsed(self, client, backend):
        backend.fail(
            "POST",
            "/categories",
            422,
            {"message": "Invalid data", "errors": {"name": ["Name is taken"], "slug": "bad"}},
        )
        with pytest.raises(ValidationError) as exc_info:
            await client.create("categories", {"name": "Beds"})
        err = exc_info.value
        assert err.message == "Invalid data"
        assert err.validation_errors == {"name": ["Name is taken"], "slug": ["bad"]}

    @pytest.mark.anyio
    async def test_error_message_fallbacks(self, client, backend):
        backend.fail("POST", "/categories", 400, {"error": "Bad input"})
        with pytest.raises(HttpError, match="Bad input"):
            await client.create("categories", {"name": "x"})
        backend.fail("POST", "/categories", 409, None)
        with pytest.raises(HttpError, match="HTTP Error 409"):
            await client.create("categories", {"name": "x"})

    @pytest.mark.anyio
    async def test_reads_retry_on_server_errors(self, client, backend):
        backend.fail("GET", "/categories", 503, times=2)
        result = await client.list("categories")
        assert result.items == []
        assert len(backend.calls("GET", "/categories")) == 3

    @pytest.mark.anyio
    async def test_reads_give_up_after_attempts(self, client, backend):
        backend.fail("GET", "/categories", 500, {"message": "boom"}, times=5)
        with pytest.raises(HttpError) as exc_info:
            await client.list("categories")
        assert exc_info.value.status == 500
        assert len(backend.calls("GET", "/categories")) == 3

    @pytest.mark.anyio
    async def test_client_errors_not_retried(self, client, backend):
        with pytest.raises(NotFoundError):
            await client.get("categories", 1)
        assert len(backend.requests) == 1

    @pytest.mark.anyio
    async def test_writes_never_retried(self, client, backend):
        backend.fail("POST", "/categories", 503, times=3)
        with pytest.raises(HttpError):
            await client.create("categories", {"name": "x"})
        assert len(backend.requests) == 1

    @pytest.mark.anyio
    async def test_network_error_translated_and_retried(self, make_client):
        attempts = []

        def handler(request):
            attempts.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler, attempts=2)
        with pytest.raises(NetworkError, match="Could not connect"):
            await client.get("categories", 1)
        assert len(attempts) == 2

    @pytest.mark.anyio
    async def test_malformed_body(self, make_client):
        client = make_client(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(ResponseFormatError):
            await client.list("categories")

    @pytest.mark.anyio
    async def test_scalar_list_body(self, make_client):
        client = make_client(lambda request: httpx.Response(200, json=42))
        with pytest.raises(ResponseFormatError) as exc_info:
            await client.list("categories")
        assert exc_info.value.status == 200


# =============================================================================
# Custom actions and endpoint checks
# =============================================================================


class TestCustomActions:
    @pytest.mark.anyio
    async def test_action_with_id(self, client, backend):
        backend.seed("categories", [{"id": 5, "active": False}])
        result = await client.custom_action("categories", "activate", 5, method="PATCH")
        assert result == {"id": 5, "active": True}
        assert backend.requests[0].method == "PATCH"
        assert backend.requests[0].url.path == "/categories/activate/5"

    @pytest.mark.anyio
    async def test_action_without_id_sends_payload(self, client, backend):
        await client.custom_action("options", "reorder", payload={"ids": [3, 1]}, method="POST")
        request = backend.requests[0]
        assert request.url.path == "/options/reorder"
        assert json.loads(request.content) == {"ids": [3, 1]}

    @pytest.mark.anyio
    async def test_get_action_sends_no_body(self, client, backend):
        await client.custom_action("options", "export", payload={"ignored": True})
        assert backend.requests[0].content == b""

    @pytest.mark.anyio
    async def test_actions_not_retried(self, client, backend):
        backend.fail("GET", "/options/export", 503)
        with pytest.raises(HttpError):
            await client.custom_action("options", "export")
        assert len(backend.requests) == 1

    @pytest.mark.anyio
    async def test_search(self, client, backend):
        await client.search("categories", "beds")
        assert backend.requests[0].url.path == "/categories/search/beds"

    @pytest.mark.anyio
    async def test_test_endpoint_success(self, client, backend):
        check = await client.test_endpoint("categories")
        assert check.success
        assert check.error is None
        assert backend.requests[0].url.params["per_page"] == "1"

    @pytest.mark.anyio
    async def test_test_endpoint_failure_never_raises(self, client, backend):
        backend.fail("GET", "/categories", 404, {"message": "gone"})
        check = await client.test_endpoint("categories")
        assert not check.success
        assert isinstance(check.error, NotFoundError)
        assert "gone" in check.message


# =============================================================================
# Construction
# =============================================================================


class TestFromSettings:
    @pytest.mark.anyio
    async def test_headers_and_token(self, registry):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[])

        settings = AdminKitSettings(
            api_base_url="http://api.test/v1", api_key="k-123", retry_delay=0
        )
        async with GenericApiClient.from_settings(
            settings,
            registry=registry,
            token_provider=lambda: "tok",
            transport=httpx.MockTransport(handler),
        ) as client:
            await client.list("categories")

        request = seen[0]
        assert request.url.path == "/v1/categories"
        assert request.headers["X-API-KEY"] == "k-123"
        assert request.headers["Authorization"] == "Bearer tok"

    @pytest.mark.anyio
    async def test_missing_token_sends_no_auth(self, registry):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[])

        settings = AdminKitSettings(api_base_url="http://api.test", auth_header="X-Auth")
        client = GenericApiClient.from_settings(
            settings,
            registry=registry,
            token_provider=lambda: None,
            transport=httpx.MockTransport(handler),
        )
        await client.list("categories")
        await client.aclose()
        assert "X-Auth" not in seen[0].headers
        assert "X-API-KEY" not in seen[0].headers
