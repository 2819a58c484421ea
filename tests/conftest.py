# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Shared fixtures: an in-memory REST backend served through httpx.MockTransport."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from adminkit.api.client import GenericApiClient
from adminkit.registry.defaults import build_default_registry
from adminkit.state.store import ContainerStore

BASE_URL = "http://backend.test"

_RESERVED = frozenset({"page", "per_page", "sort", "order", "search"})


class FakeBackend:
    """Minimal REST backend speaking the flat `{data, total, ...}` list shape.

    Routes:
        GET    /{resource}                 paginated list, other params filter
        POST   /{resource}                 create
        GET    /{resource}/{id}            fetch one
        PUT    /{resource}/{id}            update
        DELETE /{resource}/{id}            delete
        *      /{resource}/{action}[/{id}] custom action
    """

    def __init__(self) -> None:
        self.tables: dict[str, dict[int, dict[str, Any]]] = {}
        self.requests: list[httpx.Request] = []
        self._failures: list[dict[str, Any]] = []
        self._next_id = 100

    def seed(self, resource: str, items: list[dict[str, Any]]) -> None:
        table = self.tables.setdefault(resource, {})
        for item in items:
            table[int(item["id"])] = dict(item)

    def fail(
        self,
        method: str,
        path: str,
        status: int,
        body: Any = None,
        times: int = 1,
    ) -> None:
        """Answer the next `times` matching requests with `status`."""
        self._failures.append(
            {"method": method, "path": path, "status": status, "body": body, "times": times}
        )

    def calls(self, method: str | None = None, path: str | None = None) -> list[httpx.Request]:
        return [
            r
            for r in self.requests
            if (method is None or r.method == method) and (path is None or r.url.path == path)
        ]

    def _injected_failure(self, request: httpx.Request) -> httpx.Response | None:
        for failure in self._failures:
            if (
                failure["times"] > 0
                and failure["method"] == request.method
                and failure["path"] == request.url.path
            ):
                failure["times"] -= 1
                return httpx.Response(failure["status"], json=failure["body"])
        return None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        injected = self._injected_failure(request)
        if injected is not None:
            return injected

        parts = request.url.path.strip("/").split("/")
        resource, rest = parts[0], parts[1:]
        table = self.tables.setdefault(resource, {})
        body = json.loads(request.content) if request.content else None

        if not rest:
            if request.method == "GET":
                return self._list(table, request.url.params)
            if request.method == "POST":
                self._next_id += 1
                item = {"id": self._next_id, **body}
                table[self._next_id] = item
                return httpx.Response(201, json={"data": item})
        elif len(rest) == 1 and rest[0].isdigit():
            item_id = int(rest[0])
            if item_id not in table:
                return httpx.Response(404, json={"message": f"{resource} {item_id} not found"})
            if request.method == "GET":
                return httpx.Response(200, json={"data": table[item_id]})
            if request.method == "PUT":
                table[item_id] = {**table[item_id], **body}
                return httpx.Response(200, json={"data": table[item_id]})
            if request.method == "DELETE":
                del table[item_id]
                return httpx.Response(204)
        else:
            return self._action(table, rest[0], rest[1] if len(rest) > 1 else None)
        return httpx.Response(405, json={"message": "Method not allowed"})

    def _list(self, table: dict[int, dict[str, Any]], params: httpx.QueryParams) -> httpx.Response:
        items = [
            item
            for item in table.values()
            if all(
                str(item.get(key)) == value
                for key, value in params.multi_items()
                if key not in _RESERVED
            )
        ]
        page = int(params.get("page", 1))
        per_page = int(params.get("per_page", 20))
        start = (page - 1) * per_page
        return httpx.Response(
            200,
            json={
                "data": items[start : start + per_page],
                "total": len(items),
                "current_page": page,
                "per_page": per_page,
                "last_page": max(1, -(-len(items) // per_page)),
            },
        )

    def _action(
        self, table: dict[int, dict[str, Any]], action: str, raw_id: str | None
    ) -> httpx.Response:
        if raw_id is not None and raw_id.isdigit() and int(raw_id) in table:
            item = table[int(raw_id)]
            if action in ("activate", "deactivate"):
                item["active"] = action == "activate"
            return httpx.Response(200, json={"data": item})
        return httpx.Response(200, json={"data": {"action": action, "ok": True}})


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def registry():
    return build_default_registry()


@pytest.fixture
def make_client(registry):
    """Factory: GenericApiClient over any MockTransport handler, no retry delay."""

    def _make(handler, *, attempts: int = 3) -> GenericApiClient:
        http = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
        return GenericApiClient(http, registry, max_read_attempts=attempts, retry_delay=0)

    return _make


@pytest.fixture
def client(make_client, backend):
    return make_client(backend)


@pytest.fixture
def store(client, registry):
    return ContainerStore(client, registry)
