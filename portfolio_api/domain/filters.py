"""Explicit filter options for notification and activity queries.

Every recognised filter is a named field; ``None`` means the field does not
constrain the query.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class NotificationFilters:
    category: str | None = None
    kind: str | None = None
    read: bool | None = None
    importance: str | None = None


@dataclass(frozen=True)
class ActivityFilters:
    type: str | None = None
    action: str | None = None
    status: str | None = None
    importance: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    older_than: datetime | None = None


__all__ = ["ActivityFilters", "NotificationFilters"]
