"""Repository implementations for infrastructure layer."""

from .activity_repository import ActivityRepository
from .notification_repository import NotificationRepository

__all__ = [
    "ActivityRepository",
    "NotificationRepository",
]
