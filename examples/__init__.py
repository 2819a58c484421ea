# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""adminkit Usage Examples

Runnable, offline examples (the backend is served in-process through
httpx.MockTransport).

    catalog_console - shared containers, optimistic update, custom-action invalidation

Run:
    python examples/catalog_console.py
"""

__all__ = ["catalog_console"]
