"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from .base import APIModel, PaginationRead, SuccessResponse


class NotificationCreate(APIModel):
    """Payload accepted when creating a notification."""

    message: str
    category: str
    type: str | None = Field(default=None, description="success, warning, error or info")
    link: str | None = None
    importance: str | None = Field(default=None, description="low, medium or high")
    metadata: dict[str, Any] = Field(default_factory=dict)


class NotificationRead(APIModel):
    """Representation of a notification delivered to the client."""

    id: int
    message: str
    type: str
    category: str
    read: bool
    link: str | None = None
    importance: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None


class NotificationResponse(SuccessResponse):
    notification: NotificationRead


class NotificationListResponse(SuccessResponse):
    data: list[NotificationRead]
    pagination: PaginationRead


class UnreadCountResponse(SuccessResponse):
    count: int


class ModifiedCountResponse(SuccessResponse):
    modified_count: int


class DeletedCountResponse(SuccessResponse):
    deleted_count: int


__all__ = [
    "DeletedCountResponse",
    "ModifiedCountResponse",
    "NotificationCreate",
    "NotificationListResponse",
    "NotificationRead",
    "NotificationResponse",
    "UnreadCountResponse",
]
