# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Bounded retry with linear backoff for read requests."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

import anyio

from adminkit.errors import AdminKitError, HttpError, NetworkError, ResponseFormatError

logger = logging.getLogger(__name__)

__all__ = ("is_retryable", "retry_read")

T = TypeVar("T")

RETRYABLE_STATUSES = frozenset({408, 429})


def is_retryable(error: BaseException) -> bool:
    """Transport failures and transient server statuses are worth retrying."""
    if isinstance(error, NetworkError):
        return True
    if isinstance(error, ResponseFormatError):
        return False
    if isinstance(error, HttpError):
        return error.status in RETRYABLE_STATUSES or error.status >= 500
    return False


async def retry_read(
    request: Callable[[], Awaitable[T]],
    *,
    attempts: int = 3,
    delay: float = 1.0,
    label: str = "request",
) -> T:
    """Run `request` up to `attempts` times, sleeping delay * attempt between tries.

    Only AdminKitError failures flagged by is_retryable() are retried; the
    last error is re-raised once attempts are exhausted.
    """
    attempts = max(attempts, 1)
    for attempt in range(1, attempts + 1):
        try:
            return await request()
        except AdminKitError as e:
            if attempt == attempts or not is_retryable(e):
                raise
            wait = delay * attempt
            logger.warning(
                "Retrying %s (attempt %d/%d) in %.2fs after %r",
                label,
                attempt,
                attempts,
                wait,
                e,
            )
            await anyio.sleep(wait)
    raise AssertionError("unreachable")
