# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Catalog Console: two views sharing one categories container.

Demonstrates:
- A registry-driven client pointed at an in-process backend (httpx.MockTransport)
- Two ResourceHooks on the same resource sharing state (one auto-fetch)
- create with field transforms, optimistic update with rollback
- A custom action whose declared invalidation re-fetches the list
- A resource with no registry entry served by convention (/clients)
"""

from __future__ import annotations

import itertools
import json
import logging

import anyio
import httpx

from adminkit import ContainerStore, GenericApiClient, ResourceHook, build_default_registry
from adminkit.errors import AdminKitError

TABLES: dict[str, dict[int, dict]] = {
    "categories": {
        1: {"id": 1, "name": "Beds", "active": True, "position": 1},
        2: {"id": 2, "name": "Sofas", "active": False, "position": 2},
    },
    "clients": {1: {"id": 1, "name": "ACME"}},
}
_ids = itertools.count(100)


def backend(request: httpx.Request) -> httpx.Response:
    """Tiny REST backend answering in the flat `{data, total, ...}` shape."""
    parts = request.url.path.strip("/").split("/")
    table = TABLES.setdefault(parts[0], {})
    body = json.loads(request.content) if request.content else {}

    if len(parts) == 1 and request.method == "GET":
        rows = sorted(table.values(), key=lambda r: r.get("position", r["id"]))
        return httpx.Response(200, json={"data": rows, "total": len(rows), "current_page": 1})
    if len(parts) == 1 and request.method == "POST":
        row = {"id": next(_ids), **body}
        table[row["id"]] = row
        return httpx.Response(201, json={"data": row})
    if len(parts) == 2 and request.method == "PUT":
        if body.get("name") == "":
            return httpx.Response(422, json={"message": "Invalid", "errors": {"name": ["blank"]}})
        table[int(parts[1])].update(body)
        return httpx.Response(200, json={"data": table[int(parts[1])]})
    if len(parts) == 3:
        row = table[int(parts[2])]
        row["active"] = parts[1] == "activate"
        return httpx.Response(200, json={"data": row})
    return httpx.Response(404, json={"message": "Not found"})


def show(title: str, hook: ResourceHook) -> None:
    print(f"{title}:")
    for item in hook.data.items:
        flag = "on " if item.get("active") else "off"
        print(f"  [{flag}] #{item['id']} {item['name']}")
    print(f"  total={hook.data.total} pagination={hook.data.pagination}")
    print()


async def main():
    logging.basicConfig(level=logging.WARNING)
    registry = build_default_registry()
    transport = httpx.MockTransport(backend)
    http = httpx.AsyncClient(base_url="http://catalog.local", transport=transport)

    async with GenericApiClient(http, registry) as api:
        store = ContainerStore(api, registry)
        table_view = ResourceHook(store, "categories", optimistic_updates=True)
        sidebar = ResourceHook(store, "categories")

        print("=" * 60)
        print("Catalog Console")
        print("=" * 60)
        print()

        await table_view.mount()
        await sidebar.mount()
        show("Loaded (sidebar shares the table's container)", sidebar)

        await table_view.actions.create({"name": "Colchones", "active": "1", "position": "3"})
        show("After create", table_view)

        try:
            await table_view.actions.update(1, {"name": ""})
        except AdminKitError as e:
            fields = table_view.errors.update_error.validation_errors
            print(f"Update rejected: {e.message} -> {fields}")
            show("After rollback", table_view)

        await table_view.actions.custom_action("activate", 2, method="PATCH")
        show("After activate (list re-fetched)", sidebar)

        clients = ResourceHook(store, "client")
        await clients.mount()
        print(f"Unregistered 'client' resolved to {clients.data.config.endpoints.list}:")
        print(f"  {clients.data.items}")
        print("=" * 60)


if __name__ == "__main__":
    anyio.run(main)
