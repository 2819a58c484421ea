# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Reusable field transforms for ModelConfig.transform_fields.

Form inputs usually arrive as strings; these coerce them to the types the
backend expects. Each is a pure single-argument function.
"""

from __future__ import annotations

import re
from typing import Any

__all__ = ("to_bool", "to_int_or_zero", "to_number", "to_optional_int")

_FALSE_STRINGS = frozenset({"", "0", "false", "no", "off"})
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in _FALSE_STRINGS
    return bool(value)


def _leading_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


def to_int_or_zero(value: Any) -> int:
    """Parse a leading integer ('12abc' -> 12); unparseable input becomes 0."""
    parsed = _leading_int(value)
    return parsed if parsed is not None else 0


def to_optional_int(value: Any) -> int | None:
    """Empty/falsy input becomes None, anything else a leading integer."""
    if not value:
        return None
    return _leading_int(value)


def to_number(value: Any) -> int | float:
    """Strict numeric coercion. Raises ValueError on non-numeric input."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        return float(text)
