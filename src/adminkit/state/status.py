# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Container state model, per-operation status and operation outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, Field

from adminkit.errors import AdminKitError, ValidationError
from adminkit.registry.config import SortSpec

__all__ = (
    "CHANNELS",
    "ContainerState",
    "OpStatus",
    "OperationError",
    "OperationOutcome",
)

T = TypeVar("T")

CHANNELS = ("list", "fetch_by_id", "create", "update", "delete", "custom_action")
"""Independent operation channels; each has `<channel>_status` and `<channel>_error`."""


class OpStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class OperationError(BaseModel):
    """Error surfaced in a container error channel.

    Attributes:
        message: Human-readable text for display.
        status: HTTP status when the failure came from the backend.
        validation_errors: field -> messages for form highlighting.
    """

    message: str
    status: int | None = None
    validation_errors: dict[str, list[str]] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, error: BaseException, fallback: str) -> OperationError:
        if isinstance(error, AdminKitError):
            message = error.message or fallback
        else:
            message = str(error) or fallback
        return cls(
            message=message,
            status=getattr(error, "status", None),
            validation_errors=(
                dict(error.validation_errors) if isinstance(error, ValidationError) else {}
            ),
        )


@dataclass(frozen=True)
class OperationOutcome(Generic[T]):
    """Resolution of one container operation: success or failure, never a raise.

    Attributes:
        status: "succeeded" or "failed"
        data: Operation result on success
        error: Channel error record on failure
        exception: Original exception on failure, re-raised by unwrap()
    """

    status: Literal["succeeded", "failed"]
    data: T | None = None
    error: OperationError | None = None
    exception: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.status == "succeeded"

    def unwrap(self) -> T:
        """Return data, or re-raise the exception the operation failed with."""
        if self.exception is not None:
            raise self.exception
        return self.data  # type: ignore[return-value]


class ContainerState(BaseModel):
    """Per-resource state. Mutated only through ResourceContainer transitions."""

    items: list[dict[str, Any]] = Field(default_factory=list)
    current_item: dict[str, Any] | None = None
    total: int = 0
    page: int = 1
    page_size: int = 20
    total_pages: int = 0

    status: OpStatus = OpStatus.IDLE
    list_status: OpStatus = OpStatus.IDLE
    fetch_by_id_status: OpStatus = OpStatus.IDLE
    create_status: OpStatus = OpStatus.IDLE
    update_status: OpStatus = OpStatus.IDLE
    delete_status: OpStatus = OpStatus.IDLE
    custom_action_status: OpStatus = OpStatus.IDLE

    error: OperationError | None = None
    list_error: OperationError | None = None
    fetch_by_id_error: OperationError | None = None
    create_error: OperationError | None = None
    update_error: OperationError | None = None
    delete_error: OperationError | None = None
    custom_action_error: OperationError | None = None

    current_filters: dict[str, Any] = Field(default_factory=dict)
    current_sort: SortSpec = Field(default_factory=SortSpec)

    last_fetch: datetime | None = None
    last_update: datetime | None = None

    def channel_status(self, channel: str) -> OpStatus:
        return getattr(self, f"{channel}_status")

    def channel_error(self, channel: str) -> OperationError | None:
        return getattr(self, f"{channel}_error")
