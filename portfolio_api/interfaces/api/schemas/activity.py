"""Pydantic schemas for the admin activity log endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from .base import APIModel, PaginationRead, SuccessResponse


class ActivityCreate(APIModel):
    type: str
    action: str
    title: str
    description: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    actor: str | None = None
    status: str | None = None
    importance: str | None = None


class ActivityRead(APIModel):
    id: int
    type: str
    action: str
    title: str
    description: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    actor: str | None = None
    ip: str | None = None
    user_agent: str | None = None
    status: str
    importance: str
    created_at: datetime | None = None


class ActivityPage(APIModel):
    activities: list[ActivityRead]
    pagination: PaginationRead


class ActivityListResponse(SuccessResponse):
    data: ActivityPage


class ActivityResponse(SuccessResponse):
    data: ActivityRead


class ActivityPurgeResult(APIModel):
    deleted: int


class ActivityPurgeResponse(SuccessResponse):
    data: ActivityPurgeResult


__all__ = [
    "ActivityCreate",
    "ActivityListResponse",
    "ActivityPage",
    "ActivityPurgeResponse",
    "ActivityPurgeResult",
    "ActivityRead",
    "ActivityResponse",
]
