# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for adminkit.config - environment-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from adminkit.config import AdminKitSettings, get_settings


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for key in ("API_BASE_URL", "API_KEY", "API_TIMEOUT", "MAX_READ_ATTEMPTS", "RETRY_DELAY"):
        monkeypatch.delenv(f"ADMINKIT_{key}", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    def test_defaults(self):
        settings = AdminKitSettings()
        assert settings.api_base_url == "http://localhost:8000/api"
        assert settings.api_key is None
        assert settings.max_read_attempts == 3
        assert settings.auth_header == "Authorization"

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("ADMINKIT_API_BASE_URL", "https://shop.example/api")
        monkeypatch.setenv("ADMINKIT_MAX_READ_ATTEMPTS", "5")
        settings = AdminKitSettings()
        assert settings.api_base_url == "https://shop.example/api"
        assert settings.max_read_attempts == 5

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("ADMINKIT_API_KEY=from-file\n")
        assert AdminKitSettings().api_key == "from-file"

    def test_invalid_values_rejected(self):
        with pytest.raises(ValidationError):
            AdminKitSettings(max_read_attempts=0)

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()
