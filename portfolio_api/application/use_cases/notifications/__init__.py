"""Public helpers for emitting and reading notifications."""

from .events import (
    notify_blog_event,
    notify_contact_message,
    notify_content_event,
    notify_education_event,
    notify_experience_event,
    notify_project_event,
    notify_service_event,
    notify_system,
)
from .reader import (
    clear_notifications,
    count_unread,
    delete_notification,
    get_notification,
    list_notifications,
    list_unread,
    mark_all_notifications_read,
    mark_notification_read,
    normalize_notification_filters,
)
from .snapshot import build_unread_snapshot
from .writer import create_notification

__all__ = [
    "build_unread_snapshot",
    "clear_notifications",
    "count_unread",
    "create_notification",
    "delete_notification",
    "get_notification",
    "list_notifications",
    "list_unread",
    "mark_all_notifications_read",
    "mark_notification_read",
    "notify_blog_event",
    "notify_contact_message",
    "notify_content_event",
    "notify_education_event",
    "notify_experience_event",
    "notify_project_event",
    "notify_service_event",
    "notify_system",
    "normalize_notification_filters",
]
