"""JSON-ready representations of entities pushed over live channels."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from portfolio_api.domain.entities import Activity, Notification
from portfolio_api.utils import isoformat_or_none


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the wire representation of ``notification``."""

    return {
        "id": notification.id,
        "message": notification.message,
        "type": notification.kind,
        "category": notification.category,
        "read": notification.read,
        "link": notification.link,
        "importance": notification.importance,
        "metadata": normalize_datetime_values(dict(notification.metadata or {})),
        "createdAt": isoformat_or_none(notification.created_at),
    }


def serialize_activity(activity: Activity) -> dict[str, Any]:
    """Return the wire representation of ``activity``."""

    return {
        "id": activity.id,
        "type": activity.type,
        "action": activity.action,
        "title": activity.title,
        "description": activity.description,
        "metadata": normalize_datetime_values(dict(activity.metadata or {})),
        "actor": activity.actor,
        "ip": activity.ip,
        "userAgent": activity.user_agent,
        "status": activity.status,
        "importance": activity.importance,
        "createdAt": isoformat_or_none(activity.created_at),
    }


def normalize_datetime_values(data: Any) -> Any:
    """Convert ``datetime`` instances nested inside ``data`` into ISO strings."""

    if isinstance(data, datetime):
        return data.isoformat()
    if isinstance(data, dict):
        return {key: normalize_datetime_values(value) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return [normalize_datetime_values(item) for item in data]
    return data


__all__ = ["normalize_datetime_values", "serialize_activity", "serialize_notification"]
