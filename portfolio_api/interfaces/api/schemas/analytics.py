"""Schemas for visitor analytics events."""

from pydantic import Field

from .base import APIModel


class AnalyticsEventCreate(APIModel):
    type: str = Field(..., description="pageview, session_update or user_action")
    session_id: str
    path: str | None = None
    title: str | None = None
    action: str | None = None
    duration_ms: int | None = Field(default=None, ge=0)
    bounced: bool | None = None


__all__ = ["AnalyticsEventCreate"]
