"""ORM models used by the application infrastructure."""

from .activity import ActivityModel
from .notification import NotificationModel

__all__ = [
    "ActivityModel",
    "NotificationModel",
]
