"""Snapshots of the unread notification set pushed to live-update channels."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from portfolio_api.infrastructure.realtime import serialize_notification
from portfolio_api.utils import isoformat_or_none, now_in_app_timezone

from .reader import count_unread, list_unread


def build_unread_snapshot(session: Session, *, limit: int = 50) -> dict[str, Any]:
    """Return the full replacement payload for one channel tick."""

    notifications = list_unread(session, limit=limit)
    return {
        "notifications": [serialize_notification(item) for item in notifications],
        "unreadCount": count_unread(session),
        "timestamp": isoformat_or_none(now_in_app_timezone()),
    }


__all__ = ["build_unread_snapshot"]
