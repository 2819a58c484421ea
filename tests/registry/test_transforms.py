# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for adminkit.registry.transforms."""

from __future__ import annotations

import pytest

from adminkit.registry.transforms import to_bool, to_int_or_zero, to_number, to_optional_int


class TestToBool:
    @pytest.mark.parametrize("value", ["", "0", "false", "False", " no ", "off", 0, None, False])
    def test_falsy(self, value):
        assert to_bool(value) is False

    @pytest.mark.parametrize("value", ["1", "true", "yes", "on", "anything", 1, True])
    def test_truthy(self, value):
        assert to_bool(value) is True


class TestToIntOrZero:
    @pytest.mark.parametrize(
        "value,expected",
        [("5", 5), ("12abc", 12), (" -3", -3), (7.9, 7), ("abc", 0), ("", 0), (None, 0)],
    )
    def test_parse(self, value, expected):
        assert to_int_or_zero(value) == expected


class TestToOptionalInt:
    def test_empty_is_none(self):
        assert to_optional_int("") is None
        assert to_optional_int(None) is None
        assert to_optional_int(0) is None

    def test_parses_leading_int(self):
        assert to_optional_int("42") == 42
        assert to_optional_int("0") == 0

    def test_unparseable_is_none(self):
        assert to_optional_int("n/a") is None


class TestToNumber:
    def test_int_and_float(self):
        assert to_number("3") == 3
        assert to_number("3.5") == 3.5
        assert to_number(2) == 2

    def test_non_numeric_raises(self):
        with pytest.raises(ValueError):
            to_number("three")
