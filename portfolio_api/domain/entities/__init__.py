"""Domain entities exposed by the application."""

from .activity import Activity, ActivityAction, ActivityStatus, ActivityType
from .notification import (
    Importance,
    Notification,
    NotificationCategory,
    NotificationKind,
)
from .pagination import Page, Pagination

__all__ = [
    "Activity",
    "ActivityAction",
    "ActivityStatus",
    "ActivityType",
    "Importance",
    "Notification",
    "NotificationCategory",
    "NotificationKind",
    "Page",
    "Pagination",
]
