from .activity import (
    ActivityCreate,
    ActivityListResponse,
    ActivityPage,
    ActivityPurgeResponse,
    ActivityPurgeResult,
    ActivityRead,
    ActivityResponse,
)
from .analytics import AnalyticsEventCreate
from .base import APIModel, ErrorResponse, PaginationRead, SuccessResponse
from .notification import (
    DeletedCountResponse,
    ModifiedCountResponse,
    NotificationCreate,
    NotificationListResponse,
    NotificationRead,
    NotificationResponse,
    UnreadCountResponse,
)

__all__ = [
    "APIModel",
    "ActivityCreate",
    "ActivityListResponse",
    "ActivityPage",
    "ActivityPurgeResponse",
    "ActivityPurgeResult",
    "ActivityRead",
    "ActivityResponse",
    "AnalyticsEventCreate",
    "DeletedCountResponse",
    "ErrorResponse",
    "ModifiedCountResponse",
    "NotificationCreate",
    "NotificationListResponse",
    "NotificationRead",
    "NotificationResponse",
    "PaginationRead",
    "SuccessResponse",
    "UnreadCountResponse",
]
