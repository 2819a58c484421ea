# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Environment configuration via pydantic-settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ("AdminKitSettings", "get_settings")


class AdminKitSettings(BaseSettings):
    """Backend connection and retry settings.

    Attributes:
        api_base_url: Root URL of the REST backend (per-resource paths are appended).
        api_key: Sent as X-API-KEY on every request.
        api_timeout: Transport timeout in seconds.
        auth_header: Header carrying the bearer token.
        max_read_attempts: Total attempts for list/get calls (writes never retry).
        retry_delay: Base delay in seconds; attempt N waits retry_delay * N.
    """

    model_config = SettingsConfigDict(
        env_prefix="ADMINKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_base_url: str = "http://localhost:8000/api"
    api_key: str | None = None
    api_timeout: float = Field(default=10.0, gt=0)
    auth_header: str = "Authorization"
    max_read_attempts: int = Field(default=3, ge=1)
    retry_delay: float = Field(default=1.0, ge=0)


@lru_cache
def get_settings() -> AdminKitSettings:
    return AdminKitSettings()
